"""Shared fixtures for the wizard and server tests."""

import itertools
import json
import logging
from typing import Callable, List

import httpx
import pytest

from clawsetup.tokens import TokenGenerator


def counting_source() -> Callable[[int], bytes]:
    """Deterministic byte source: each call returns a different fill byte."""
    counter = itertools.count(1)

    def source(nbytes: int) -> bytes:
        return bytes([next(counter) % 256]) * nbytes

    return source


@pytest.fixture
def tokens() -> TokenGenerator:
    return TokenGenerator(random_source=counting_source())


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays responses.

    ``responses`` maps a path to either an ``httpx.Response`` or a callable
    taking the request and returning one (or raising).
    """

    def __init__(self, responses: dict) -> None:
        self.responses = responses
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.responses[request.url.path]
        if callable(reply):
            return reply(request)
        return reply

    def bodies(self, path: str) -> List[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.url.path == path
        ]


@pytest.fixture
def make_http():
    """Build an AsyncClient backed by a RecordingHandler."""
    def _make(responses: dict):
        handler = RecordingHandler(responses)
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(handler),
            base_url="http://setup.test",
        )
        return client, handler

    return _make


@pytest.fixture(autouse=True)
def restore_root_logging():
    """CLI commands reconfigure the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
