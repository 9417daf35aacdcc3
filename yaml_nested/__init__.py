from yaml_nested.conversion import flatten, path_segment, unflatten
from yaml_nested.exceptions import (
    ConversionError,
    DuplicateValueError,
    InvalidDocumentError,
    InvalidKeyError,
    UnsupportedNodeError,
)
from yaml_nested.values import Tagged

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "DuplicateValueError",
    "InvalidDocumentError",
    "InvalidKeyError",
    "Tagged",
    "UnsupportedNodeError",
    "flatten",
    "path_segment",
    "unflatten",
]
