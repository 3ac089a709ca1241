"""
Patch one node of a JSON document and re-serialize it

The write path used by the editor's save action is save_node():
    1. merge_with_existing() folds the node currently stored at the path into
       the new data (one level deep)
    2. the node is rebuilt along the path with a shallow merge at the target
    3. the document is serialized with 2-space indent

Containers are rebuilt level by level, the parsed input is never mutated.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from node_editor.exceptions import (
    DocumentParseError,
    InvalidPathError,
    NodePatchError,
    PathConflictError,
)
from node_editor.services.json_values import (
    JSONKind,
    JSONValue,
    PathSegment,
    dumps_indented,
    is_plain_object,
    kind_of,
    loads_strict,
)
from node_editor.services.path_format import json_path_to_string

logger = logging.getLogger(__name__)


# ============================================================================
# Result type
# ============================================================================

class PatchResult(BaseModel):
    """Outcome of a patch: the new document text, or the reason it failed"""
    success: bool
    document: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, document: str) -> "PatchResult":
        return cls(success=True, document=document)

    @classmethod
    def fail(cls, reason: str) -> "PatchResult":
        return cls(success=False, error=reason)


# ============================================================================
# Path handling
# ============================================================================

def _validate_path(path: Optional[Sequence[PathSegment]]) -> List[PathSegment]:
    if isinstance(path, (str, bytes)):
        raise InvalidPathError(f"Path must be a sequence of segments, got {type(path).__name__} {path!r}")
    try:
        segments = list(path or [])
    except TypeError:
        raise InvalidPathError(f"Path must be a sequence of segments, got {path!r}") from None
    for position, segment in enumerate(segments):
        if isinstance(segment, bool) or not isinstance(segment, (str, int)):
            raise InvalidPathError(
                f"Segment {position} must be a key or an index, got {segment!r}"
            )
        if isinstance(segment, int) and segment < 0:
            raise InvalidPathError(f"Segment {position} is a negative index: {segment}")
    return segments


def _empty_container_for(segment: PathSegment) -> JSONValue:
    """Container a missing node must become so that `segment` can address into it"""
    return [] if isinstance(segment, int) else {}


def _get_child(container: JSONValue, segment: PathSegment, trail: List[PathSegment]) -> JSONValue:
    """
    Child of container at segment, None when absent

    Raises:
        PathConflictError: segment kind does not match the container
    """
    kind = kind_of(container)
    if isinstance(segment, int):
        if kind is not JSONKind.ARRAY:
            raise PathConflictError(json_path_to_string(trail), "array", kind.value)
        return container[segment] if segment < len(container) else None

    if kind is not JSONKind.OBJECT:
        raise PathConflictError(json_path_to_string(trail), "object", kind.value)
    return container.get(segment)


def _with_child(container: JSONValue, segment: PathSegment, value: JSONValue) -> JSONValue:
    """Copy of container with segment set to value; an index may append one slot"""
    if isinstance(segment, int):
        updated = list(container)
        if segment == len(updated):
            updated.append(value)
        else:
            updated[segment] = value
        return updated

    updated = dict(container)
    updated[segment] = value
    return updated


# ============================================================================
# Merging
# ============================================================================

def _shallow_merge(existing: JSONValue, new_data: JSONValue) -> JSONValue:
    """Overlay new_data on existing when both are objects, otherwise new_data wins"""
    if is_plain_object(existing) and is_plain_object(new_data):
        return {**existing, **new_data}
    return new_data


def _update_node(node: JSONValue, segments: List[PathSegment], new_data: JSONValue) -> JSONValue:
    # Walk down recording each (container, segment), then rebuild bottom-up
    trail: List[PathSegment] = []
    steps: List[Tuple[JSONValue, PathSegment]] = []
    for depth, current in enumerate(segments):
        existing = _get_child(node, current, trail)
        if isinstance(current, int) and current > len(node):
            raise InvalidPathError(
                f"Index {current} at {json_path_to_string(trail)} is past the end "
                f"of an array of length {len(node)}"
            )
        steps.append((node, current))
        trail.append(current)

        if depth < len(segments) - 1:
            node = existing if existing is not None else _empty_container_for(segments[depth + 1])
        elif isinstance(current, int):
            # Array slot: missing elements start out as an empty object
            node = _shallow_merge(existing if existing is not None else {}, new_data)
        else:
            node = _shallow_merge(existing, new_data)

    for container, segment in reversed(steps):
        node = _with_child(container, segment, node)
    return node


def apply_node_update(document: JSONValue, path: Optional[Sequence[PathSegment]], new_data: JSONValue) -> JSONValue:
    """
    Return a copy of document with the node at path merged with new_data

    Missing intermediate nodes are created as {} or [] depending on the
    segment that follows them.

    Raises:
        InvalidPathError, PathConflictError
    """
    segments = _validate_path(path)
    if not segments:
        return new_data
    if document is None:
        document = _empty_container_for(segments[0])
    return _update_node(document, segments, new_data)


def find_node(document: JSONValue, path: Optional[Sequence[PathSegment]]) -> JSONValue:
    """Node stored at path, or None if it is absent or unreachable"""
    node = document
    trail: List[PathSegment] = []
    for segment in _validate_path(path):
        try:
            node = _get_child(node, segment, trail)
        except PathConflictError as e:
            logger.debug(f"No existing node at {json_path_to_string(path)}: {e}")
            return None
        if node is None:
            return None
        trail.append(segment)
    return node


def merge_with_existing(
    document: JSONValue,
    path: Optional[Sequence[PathSegment]],
    new_data: JSONValue,
) -> JSONValue:
    """
    Fold the node currently at path into new_data before it is written

    For each key of the existing node:
      - both sides are objects: {**existing[key], **new_data[key]}, one level only;
        objects nested below that come from new_data unchanged
      - key missing from new_data: copied from the existing node
      - otherwise new_data's value is kept

    The root (empty path) is never merged.
    """
    if not path:
        return new_data

    existing = find_node(document, path)
    if not (is_plain_object(existing) and is_plain_object(new_data)):
        return new_data

    merged: Dict[str, Any] = dict(new_data)
    for key, value in existing.items():
        if is_plain_object(value) and is_plain_object(merged.get(key)):
            merged[key] = {**value, **merged[key]}
        elif key not in merged:
            merged[key] = value
    return merged


# ============================================================================
# Document-level operations
# ============================================================================

def _parse_document(document_text: str) -> JSONValue:
    try:
        return loads_strict(document_text)
    except (TypeError, ValueError, RecursionError) as e:
        raise DocumentParseError(f"Document is not valid JSON: {e}") from e


def _serialize(document: JSONValue) -> str:
    try:
        return dumps_indented(document)
    except (TypeError, ValueError, RecursionError) as e:
        raise NodePatchError(f"Updated document cannot be serialized: {e}") from e


def update_node_in_json(
    document_text: str,
    path: Optional[Sequence[PathSegment]],
    new_data: JSONValue,
) -> PatchResult:
    """
    Merge new_data into the node at path and re-serialize the document

    Args:
        document_text: Full JSON document
        path: Keys / indices of the target node; empty replaces the whole document
        new_data: Partial value to write

    Returns:
        PatchResult with the updated text, or the failure reason
    """
    try:
        document = _parse_document(document_text)
        return PatchResult.ok(_serialize(apply_node_update(document, path, new_data)))
    except NodePatchError as e:
        return PatchResult.fail(str(e))


def save_node(
    document_text: str,
    path: Optional[Sequence[PathSegment]],
    new_data: JSONValue,
) -> PatchResult:
    """
    Save an edited node against the current document

    Same as update_node_in_json, but new_data is first merged with the node
    already stored at path (see merge_with_existing), so sibling fields and
    nested object fields the edit did not touch are kept.
    """
    try:
        document = _parse_document(document_text)
        merged = merge_with_existing(document, path, new_data)
        return PatchResult.ok(_serialize(apply_node_update(document, path, merged)))
    except NodePatchError as e:
        return PatchResult.fail(str(e))


def patch_document(
    document_text: str,
    path: Optional[Sequence[PathSegment]],
    new_data: JSONValue,
    on_error: Optional[Callable[[str], None]] = None,
) -> str:
    """
    Never-raising form of update_node_in_json

    On failure the original text is returned; the reason is logged and passed
    to on_error if given.
    """
    result = update_node_in_json(document_text, path, new_data)
    if result.success:
        return result.document

    logger.error(f"Failed to update JSON at path {path!r}: {result.error}")
    if on_error is not None:
        on_error(result.error)
    return document_text
