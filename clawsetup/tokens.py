# -*- coding: utf-8 -*-
"""Gateway token generation."""

from __future__ import annotations

import secrets
from typing import Callable

from .constant import TOKEN_BYTES

RandomSource = Callable[[int], bytes]


class TokenGenerator:
    """Produce opaque gateway tokens from a cryptographically secure source.

    Each token is ``TOKEN_BYTES`` random bytes rendered as lowercase hex
    (48 characters). *random_source* takes a byte count and returns that
    many bytes; tests inject a deterministic one.
    """

    def __init__(
        self,
        random_source: RandomSource = secrets.token_bytes,
        nbytes: int = TOKEN_BYTES,
    ) -> None:
        self._random_source = random_source
        self._nbytes = nbytes

    def generate(self) -> str:
        raw = self._random_source(self._nbytes)
        if len(raw) != self._nbytes:
            raise ValueError(
                f"random source returned {len(raw)} bytes, "
                f"expected {self._nbytes}",
            )
        return raw.hex()


def generate_token() -> str:
    """Return a fresh token from the system CSPRNG."""
    return TokenGenerator().generate()
