"""
Errors raised while patching a document node
"""


class NodePatchError(Exception):
    """Base class for every patch failure"""


class DocumentParseError(NodePatchError):
    """Document text is not valid JSON"""


class InvalidPathError(NodePatchError):
    """A path segment is neither an object key nor a non-negative array index"""


class PathConflictError(NodePatchError):
    """A path segment does not match the kind of container found at that point"""

    def __init__(self, location: str, expected: str, found: str):
        self.location = location
        self.expected = expected
        self.found = found
        super().__init__(f"Expected {expected} at {location}, found {found}")
