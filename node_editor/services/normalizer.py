"""
Convert a node's flat row descriptors back into a nested JSON value
"""
import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional, Tuple

from node_editor.config import NESTED_ROW_TYPES
from node_editor.services.json_values import JSONValue, dumps_indented, loads_strict

logger = logging.getLogger(__name__)


def _row_fields(row: Any) -> Tuple[Any, Any, Any]:
    """Read (key, type, value) from a RowDescriptor model or a plain mapping"""
    if isinstance(row, Mapping):
        return row.get("key"), row.get("type"), row.get("value")
    return getattr(row, "key", None), getattr(row, "type", None), getattr(row, "value", None)


def _parse_nested_value(value: Any, row_type: str) -> JSONValue:
    """Parse an object/array row; anything unparseable becomes the type's zero value"""
    zero = NESTED_ROW_TYPES[row_type]
    if not isinstance(value, str):
        return zero()
    try:
        return loads_strict(value)
    except (ValueError, RecursionError):
        logger.debug(f"Row value is not valid {row_type} JSON, using {zero()!r}")
        return zero()


def _parse_primitive_value(value: Any) -> Any:
    """Primitive rows are kept raw unless the text looks like embedded JSON"""
    if isinstance(value, str) and (value.startswith("{") or value.startswith("[")):
        try:
            return loads_strict(value)
        except (ValueError, RecursionError):
            logger.debug("Primitive row looked like JSON but did not parse, keeping raw text")
    return value


def normalize_rows(rows: Optional[Iterable[Any]]) -> Dict[str, Any]:
    """
    Build the node object from its row descriptors

    Args:
        rows: RowDescriptor models or {key, type, value} mappings, in display order

    Returns:
        Dict keyed by row key; rows without a key are skipped, later rows
        with the same key overwrite earlier ones
    """
    result: Dict[str, Any] = {}
    if not rows:
        return result

    for row in rows:
        key, row_type, value = _row_fields(row)
        if not key:
            continue

        if row_type in NESTED_ROW_TYPES:
            result[key] = _parse_nested_value(value, row_type)
        else:
            result[key] = _parse_primitive_value(value)

    return result


def normalize_node_data(rows: Optional[Iterable[Any]]) -> str:
    """Serialized (2-space indented) form of normalize_rows"""
    if not rows:
        return "{}"
    return dumps_indented(normalize_rows(rows))
