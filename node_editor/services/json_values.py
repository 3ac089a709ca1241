"""
JSON value kinds and helpers shared by the normalizer and the tree patcher
"""
import json
from enum import Enum
from typing import Any, Dict, List, Union

from node_editor.config import JSON_INDENT

JSONValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]
PathSegment = Union[str, int]


class JSONKind(str, Enum):
    """Closed set of shapes a JSON node can take"""
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> JSONKind:
    """
    Classify a decoded JSON value

    Raises:
        TypeError: if value is not something json.loads could produce
    """
    if value is None:
        return JSONKind.NULL
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return JSONKind.BOOL
    if isinstance(value, (int, float)):
        return JSONKind.NUMBER
    if isinstance(value, str):
        return JSONKind.STRING
    if isinstance(value, list):
        return JSONKind.ARRAY
    if isinstance(value, dict):
        return JSONKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def is_plain_object(value: Any) -> bool:
    """True for JSON objects only (not arrays, not null)"""
    return isinstance(value, dict)


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant: {name}")


def loads_strict(text: str) -> JSONValue:
    """json.loads that also rejects NaN / Infinity"""
    return json.loads(text, parse_constant=_reject_constant)


def dumps_indented(value: JSONValue) -> str:
    """Canonical serialized form: 2-space indent, unicode kept as-is"""
    return json.dumps(value, indent=JSON_INDENT, ensure_ascii=False, allow_nan=False)
