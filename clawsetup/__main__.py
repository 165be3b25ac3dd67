# -*- coding: utf-8 -*-
from .cli.main import cli

cli()
