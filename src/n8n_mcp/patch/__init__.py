"""JSON Patch (RFC 6902) over JSON Pointer (RFC 6901) paths."""

from n8n_mcp.patch.apply import OPERATIONS, apply_patch, json_equal
from n8n_mcp.patch.pointer import parse_pointer, resolve

__all__ = [
    "OPERATIONS",
    "apply_patch",
    "json_equal",
    "parse_pointer",
    "resolve",
]
