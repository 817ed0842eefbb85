"""JSON Patch (RFC 6902) application.

Operations run in order against a private deep copy of the target document;
each ``path``/``from`` resolves against the state the previous operation left.
The first failure aborts the whole sequence with :class:`PatchError` and the
caller's document is never touched.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from n8n_mcp.errors import PatchError
from n8n_mcp.patch.pointer import parse_index, parse_pointer, resolve


def apply_patch(document: Any, operations: Sequence[Mapping[str, Any]]) -> Any:
    """Apply *operations* to a copy of *document* and return the result."""
    result = copy.deepcopy(document)
    for index, operation in enumerate(operations):
        try:
            result = _apply_operation(result, operation)
        except PatchError as exc:
            raise PatchError(exc.detail, index) from exc
    return result


def json_equal(left: Any, right: Any) -> bool:
    """Compare two JSON values the way ``test`` requires.

    Numbers compare by value (``1 == 1.0``) but booleans never equal numbers.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(json_equal(left[k], right[k]) for k in left)
    if isinstance(left, list) and isinstance(right, list):
        return len(left) == len(right) and all(map(json_equal, left, right))
    return type(left) is type(right) and left == right


# ---------------------------------------------------------------------------
# Primitive mutations on an already-copied document
# ---------------------------------------------------------------------------


def _split(tokens: list[str], document: Any) -> tuple[Any, str]:
    return resolve(document, tokens[:-1]), tokens[-1]


def _add(document: Any, tokens: list[str], value: Any) -> Any:
    if not tokens:
        return value
    parent, key = _split(tokens, document)
    if isinstance(parent, dict):
        parent[key] = value
    elif isinstance(parent, list):
        parent.insert(parse_index(key, len(parent), allow_end=True), value)
    else:
        raise PatchError(f"cannot add {key!r} to a scalar value")
    return document


def _remove(document: Any, tokens: list[str]) -> Any:
    if not tokens:
        raise PatchError("cannot remove the document root")
    parent, key = _split(tokens, document)
    if isinstance(parent, dict):
        if key not in parent:
            raise PatchError(f"key {key!r} not found")
        del parent[key]
    elif isinstance(parent, list):
        del parent[parse_index(key, len(parent))]
    else:
        raise PatchError(f"cannot remove {key!r} from a scalar value")
    return document


def _replace(document: Any, tokens: list[str], value: Any) -> Any:
    if not tokens:
        return value
    parent, key = _split(tokens, document)
    if isinstance(parent, dict):
        if key not in parent:
            raise PatchError(f"key {key!r} not found")
        parent[key] = value
    elif isinstance(parent, list):
        parent[parse_index(key, len(parent))] = value
    else:
        raise PatchError(f"cannot replace {key!r} inside a scalar value")
    return document


# ---------------------------------------------------------------------------
# Operation handlers
# ---------------------------------------------------------------------------


def _require_value(operation: Mapping[str, Any]) -> Any:
    if "value" not in operation:
        raise PatchError(f"'{operation['op']}' requires 'value'")
    return copy.deepcopy(operation["value"])


def _require_from(operation: Mapping[str, Any]) -> list[str]:
    source = operation.get("from")
    if not isinstance(source, str):
        raise PatchError(f"'{operation['op']}' requires a string 'from'")
    return parse_pointer(source)


def _op_add(document: Any, tokens: list[str], operation: Mapping[str, Any]) -> Any:
    return _add(document, tokens, _require_value(operation))


def _op_remove(document: Any, tokens: list[str], operation: Mapping[str, Any]) -> Any:
    return _remove(document, tokens)


def _op_replace(document: Any, tokens: list[str], operation: Mapping[str, Any]) -> Any:
    return _replace(document, tokens, _require_value(operation))


def _op_move(document: Any, tokens: list[str], operation: Mapping[str, Any]) -> Any:
    source = _require_from(operation)
    if source == tokens:
        resolve(document, source)
        return document
    if tokens[: len(source)] == source:
        raise PatchError("cannot move a value into one of its own children")
    value = resolve(document, source)
    document = _remove(document, source)
    return _add(document, tokens, value)


def _op_copy(document: Any, tokens: list[str], operation: Mapping[str, Any]) -> Any:
    value = copy.deepcopy(resolve(document, _require_from(operation)))
    return _add(document, tokens, value)


def _op_test(document: Any, tokens: list[str], operation: Mapping[str, Any]) -> Any:
    expected = _require_value(operation)
    actual = resolve(document, tokens)
    if not json_equal(actual, expected):
        raise PatchError(f"test failed at {operation['path']!r}")
    return document


OPERATIONS: dict[str, Callable[[Any, list[str], Mapping[str, Any]], Any]] = {
    "add": _op_add,
    "remove": _op_remove,
    "replace": _op_replace,
    "move": _op_move,
    "copy": _op_copy,
    "test": _op_test,
}


def _apply_operation(document: Any, operation: Mapping[str, Any]) -> Any:
    if not isinstance(operation, Mapping):
        raise PatchError("operation must be an object")
    name = operation.get("op")
    if not isinstance(name, str) or name not in OPERATIONS:
        raise PatchError(f"unknown op {name!r}")
    handler = OPERATIONS[name]
    path = operation.get("path")
    if not isinstance(path, str):
        raise PatchError("'path' must be a string")
    return handler(document, parse_pointer(path), operation)
