"""
txscope.db.savepoint

Savepoint name generation.

Responsibilities:
- Produce fixed-length, unquoted-identifier-safe savepoint names.
- Amortize randomness: fill a buffer once, slice fixed-size chunks until exhausted.
"""

from __future__ import annotations

import secrets

DEFAULT_NAME_BYTES = 8
DEFAULT_BUFFER_BYTES = 2048

# Hex digits that cannot start an identifier are shifted onto letters (0-9 -> g-p).
# The mapping is one-to-one, so no entropy is lost.
_LEADING_DIGITS = str.maketrans("0123456789", "ghijklmnop")


class SavepointNameGenerator:
    def __init__(
        self,
        *,
        name_bytes: int = DEFAULT_NAME_BYTES,
        buffer_bytes: int = DEFAULT_BUFFER_BYTES,
    ) -> None:
        if name_bytes <= 0:
            raise ValueError("name_bytes must be positive")
        if buffer_bytes <= 0 or buffer_bytes % name_bytes != 0:
            raise ValueError("buffer_bytes must be a positive multiple of name_bytes")
        self._name_bytes = name_bytes
        self._buffer_bytes = buffer_bytes
        self._buffer = b""
        self._offset = 0

    @property
    def name_length(self) -> int:
        return self._name_bytes * 2

    def __call__(self) -> str:
        if self._offset == 0:
            self._buffer = secrets.token_bytes(self._buffer_bytes)

        chunk = self._buffer[self._offset : self._offset + self._name_bytes]
        self._offset += self._name_bytes
        if self._offset == self._buffer_bytes:
            self._offset = 0

        name = chunk.hex()
        return name[0].translate(_LEADING_DIGITS) + name[1:]


_default_generator = SavepointNameGenerator()


def create_savepoint_name() -> str:
    return _default_generator()


# --- Module Notes -----------------------------------------------------------
# Not thread-safe; the library runs on one event loop and never awaits inside `__call__`.
