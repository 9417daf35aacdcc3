"""
Description:
Exception classes for conversion errors.

Recoverable errors derive from ConversionError. Trees that break the input
contract of flatten/unflatten (tagged nodes, null or composite mapping keys)
raise TypeError subclasses instead, since a correctly parsed document never
produces them.
"""


class ConversionError(Exception):
    """Base class for all recoverable conversion errors – makes catching easy."""
    pass


class DuplicateValueError(ConversionError):
    """Two flattened keys assign a value to the same position, or to a position and one of its ancestors."""

    def __init__(self, key: str, token: str):
        self.key = key
        self.token = token
        super().__init__(
            f"while handling key '{key}', found a token '{token}' that has at least 2 values"
        )


class InvalidDocumentError(ConversionError):
    """A flat document did not have a mapping at its root."""
    pass


class UnsupportedNodeError(TypeError):
    """Tree contains a node kind that cannot be flattened (e.g. a tagged value)."""
    pass


class InvalidKeyError(TypeError):
    """Mapping key or flattened path is not a literal scalar."""
    pass
