# -*- coding: utf-8 -*-
"""OpenClaw setup wizard: provider selection, model discovery, config save."""

__version__ = "0.1.0"
