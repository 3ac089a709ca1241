"""
Display form of node paths, e.g. $["customer"][0]["name"]
"""
from typing import Optional, Sequence

from node_editor.config import ROOT_MARKER
from node_editor.services.json_values import PathSegment


def _format_segment(segment: PathSegment) -> str:
    # Keys are quoted verbatim, embedded quotes are not escaped
    if isinstance(segment, int) and not isinstance(segment, bool):
        return str(segment)
    return f'"{segment}"'


def json_path_to_string(path: Optional[Sequence[PathSegment]] = None) -> str:
    """
    Render a node path in bracket notation

    Args:
        path: Object keys and array indices from the root; None or empty is the root

    Returns:
        "$" for the root, otherwise "$[seg0][seg1]..."
    """
    if not path:
        return ROOT_MARKER
    return ROOT_MARKER + "".join(f"[{_format_segment(segment)}]" for segment in path)
