"""Value types that complement the plain Python values of a parsed document."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Tagged:
    """
    A YAML node carrying a local tag, e.g. ``!secret db-password``.

    Attributes:
        tag (str): The tag including its leading ``!``.
        value (Any): The scalar, list or dict the tag is attached to.
    """
    tag: str
    value: Any
