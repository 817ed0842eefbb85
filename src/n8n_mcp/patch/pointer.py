"""JSON Pointer (RFC 6901) parsing and resolution."""

from __future__ import annotations

import re
from typing import Any

from n8n_mcp.errors import PatchError

_INDEX_RE = re.compile(r"^(0|[1-9][0-9]*)$")


def parse_pointer(pointer: str) -> list[str]:
    """Split *pointer* into unescaped reference tokens.

    ``""`` is the whole document and yields no tokens.
    """
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise PatchError(f"invalid pointer {pointer!r}: must be empty or start with '/'")
    return [token.replace("~1", "/").replace("~0", "~") for token in pointer[1:].split("/")]


def parse_index(token: str, length: int, *, allow_end: bool = False) -> int:
    """Convert an array reference token into a list index.

    With *allow_end* the index may equal *length* (append position), and ``-``
    resolves to *length*.
    """
    if token == "-":
        if allow_end:
            return length
        raise PatchError("'-' does not reference an existing array element")
    if not _INDEX_RE.match(token):
        raise PatchError(f"invalid array index {token!r}")
    index = int(token)
    upper = length if allow_end else length - 1
    if index > upper:
        raise PatchError(f"array index {index} out of range")
    return index


def child(container: Any, token: str) -> Any:
    """Return the value *token* references inside *container*."""
    if isinstance(container, dict):
        if token not in container:
            raise PatchError(f"key {token!r} not found")
        return container[token]
    if isinstance(container, list):
        return container[parse_index(token, len(container))]
    raise PatchError(f"cannot reference {token!r} inside a scalar value")


def resolve(document: Any, tokens: list[str]) -> Any:
    """Walk *tokens* from *document* and return the referenced value."""
    current = document
    for token in tokens:
        current = child(current, token)
    return current
