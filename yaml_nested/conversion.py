"""
Description:
Conversions between nested documents and flat, dot-addressed mappings.

The public surface is flatten(tree) and unflatten(pairs).

    {"a": {"b": 1, "c": [1, 2]}, "x": None}
    ⇄ {"a.b": 1, "a.c": [1, 2], "x": None}

Sequences are leaves: they are stored whole and never split into indexed keys.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Tuple, Union

from yaml_nested.exceptions import (
    DuplicateValueError,
    InvalidKeyError,
    UnsupportedNodeError,
)

logger = logging.getLogger(__name__)

DOT = "."

# Leaf kinds of a parsed document; None is checked separately
_SCALARS = (bool, int, float, str)
_SEQUENCES = (list, tuple)

# float keys that have no plain decimal spelling
_NON_FINITE = {
    math.inf: ".inf",
    -math.inf: "-.inf",
}


def _format_number(number: Union[int, float]) -> str:
    """
    Render a numeric mapping key in its canonical string form.
    Args:
        number (Union[int, float]): The key to render.
    Returns:
        str: Decimal form of the number, or the YAML spelling of inf/nan.
    """
    if isinstance(number, int):
        return str(number)
    if math.isnan(number):
        return ".nan"
    if number in _NON_FINITE:
        return _NON_FINITE[number]
    # 1e+16 → 1e16, 1e-05 → 1e-5
    mantissa, exponent_mark, exponent = repr(number).partition("e")
    if not exponent_mark:
        return mantissa
    return f"{mantissa}e{int(exponent)}"


def path_segment(key: Any) -> str:
    """
    Turn a literal mapping key into one path segment.
    Args:
        key (Any): A mapping key of the document (bool, int, float or str).
    Returns:
        str: "true"/"false" for booleans, the canonical number for numbers,
        the string itself otherwise.
    Raises:
        InvalidKeyError: If the key is None or not a literal scalar.
    """
    # bool MUST be checked before int, bool subclasses int
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, (int, float)):
        return _format_number(key)
    if isinstance(key, str):
        return key
    if key is None:
        raise InvalidKeyError("a mapping key cannot be null")
    raise InvalidKeyError(f"a mapping key should be literal, found: {key!r}")


def _is_leaf(node: Any) -> bool:
    return node is None or isinstance(node, _SCALARS + _SEQUENCES)


def flatten(tree: Any) -> Dict[str, Any]:
    """
    Flatten a nested document into a mapping of dot-joined paths to leaves.

    {"a": {"b": {"c": None}}} → {"a.b.c": None}

    A bare scalar or sequence at the root has no path and yields {}.
    Args:
        tree (Any): A parsed document (dicts, lists and scalars).
    Returns:
        Dict[str, Any]: Leaves keyed by path, keys in sorted order.
    Raises:
        UnsupportedNodeError: If the tree holds a tagged or otherwise unknown node.
        InvalidKeyError: If a mapping key is None or composite.
    """
    output: Dict[str, Any] = {}
    # (path so far, subtree), popped depth-first so entries are visited in document order
    pending: List[Tuple[Tuple[str, ...], Any]] = [((), tree)]

    while pending:
        path, node = pending.pop()

        if _is_leaf(node):
            if not path:
                logger.debug("Root value is a bare %s, nothing to flatten", type(node).__name__)
                continue
            full_path = DOT.join(path)
            if full_path in output:
                logger.warning("Path '%s' is produced twice, keeping the later value", full_path)
            output[full_path] = node
            continue

        if isinstance(node, Mapping):
            children = [(path + (path_segment(key),), value) for key, value in node.items()]
            pending.extend(reversed(children))
            continue

        raise UnsupportedNodeError(
            f"Cannot flatten node of type {type(node).__name__} at '{DOT.join(path)}'"
        )

    logger.debug("Flattened document into %d paths", len(output))
    return dict(sorted(output.items()))


def _detach(value: Any) -> Any:
    """Copy mappings into fresh dicts so later paths can extend them safely."""
    if isinstance(value, Mapping):
        return {key: _detach(item) for key, item in value.items()}
    return value


def unflatten(pairs: Union[Mapping, Iterable[Tuple[str, Any]]]) -> Dict[str, Any]:
    """
    Fold dot-separated paths back into a nested document.

    [("a.a.a", None), ("a.a.b", False)] → {"a": {"a": {"a": None, "b": False}}}

    Pairs are consumed in order. A path may not address a position that an
    earlier path already assigned, nor pass through one that holds a leaf.
    Args:
        pairs (Union[Mapping, Iterable[Tuple[str, Any]]]): (path, value) pairs,
            or a mapping of path to value.
    Returns:
        Dict[str, Any]: The rebuilt document.
    Raises:
        DuplicateValueError: If two paths collide; carries the path being
            handled and the segment where the collision was found.
        InvalidKeyError: If a path is not a string.
    """
    if isinstance(pairs, Mapping):
        pairs = pairs.items()

    root: Dict[str, Any] = {}
    count = 0
    for key, value in pairs:
        if not isinstance(key, str):
            raise InvalidKeyError(f"a flattened key should be a string, found: {key!r}")

        *parents, leaf = key.split(DOT)
        current = root
        for token in parents:
            if token not in current:
                child: Dict[str, Any] = {}
                current[token] = child
                current = child
            elif isinstance(current[token], dict):
                current = current[token]
            else:
                logger.debug("Key '%s' passes through leaf '%s'", key, token)
                raise DuplicateValueError(key, token)

        if leaf in current:
            logger.debug("Key '%s' assigns '%s' a second time", key, leaf)
            raise DuplicateValueError(key, leaf)
        current[leaf] = _detach(value)
        count += 1

    logger.debug("Unflattened %d paths", count)
    return root
