"""Dotted keypath operations on parsed locale file trees.

A parsed file is a recursive value: dicts, lists and scalars. Lookups treat
a dotted key that exists verbatim at the top level as a single key before
falling back to walking the nested structure, so literal keys such as
``"a.b.c"`` and nested ones (``{"a": {"b": {"c": ...}}}``) are both reachable.
"""

from typing import Any, Dict, List


class _Missing:
    """Marker for an absent value, distinct from ``None``."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


MISSING = _Missing()


def split_keypath(keypath: str) -> List[str]:
    return keypath.split(".") if keypath else []


def is_scalar(value: Any) -> bool:
    """True for defined values that are neither objects nor arrays."""
    return value is not MISSING and not isinstance(value, (dict, list))


def _child(node: Any, segment: str) -> Any:
    if isinstance(node, dict):
        return node.get(segment, MISSING)
    if isinstance(node, list) and segment.isdigit():
        index = int(segment)
        return node[index] if index < len(node) else MISSING
    return MISSING


def get_path(tree: Any, keypath: str, default: Any = MISSING) -> Any:
    """
    Look up a dotted keypath.

    Args:
        tree: Parsed file content
        keypath: Dotted path; empty string addresses the whole tree
        default: Returned when the path does not exist

    Returns:
        The value at keypath, or default
    """
    if not keypath:
        return tree
    if isinstance(tree, dict) and keypath in tree:
        return tree[keypath]

    node = tree
    for segment in split_keypath(keypath):
        node = _child(node, segment)
        if node is MISSING:
            return default
    return node


def _deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in source.items():
        if value is MISSING:
            continue
        current = target.get(key, MISSING)
        if isinstance(current, dict) and isinstance(value, dict):
            _deep_merge(current, value)
        else:
            target[key] = value
    return target


def merge_key(tree: Dict[str, Any], keypath: str, value: Any) -> Dict[str, Any]:
    """
    Merge ``{keypath: value}`` into tree in place.

    The whole dotted keypath becomes one literal key: writing ``"a.b.c"``
    creates the key ``"a.b.c"``, not ``{"a": {"b": {"c": ...}}}``. When the
    existing value and the new value are both dicts they are deep-merged.

    Args:
        tree: Parsed file content (mutated)
        keypath: Dotted key used verbatim as the key
        value: Value to store; MISSING leaves the tree untouched

    Returns:
        The same tree object
    """
    return _deep_merge(tree, {keypath: value})


def omit_path(tree: Dict[str, Any], keypath: str) -> Dict[str, Any]:
    """
    Remove a keypath from tree in place.

    A literal top-level key wins over the nested interpretation. Absent
    paths are ignored.
    """
    if keypath in tree:
        del tree[keypath]
        return tree

    segments = split_keypath(keypath)
    if not segments:
        return tree

    parent = get_path(tree, ".".join(segments[:-1])) if len(segments) > 1 else tree
    last = segments[-1]
    if isinstance(parent, dict):
        parent.pop(last, None)
    elif isinstance(parent, list) and last.isdigit() and int(last) < len(parent):
        del parent[int(last)]
    return tree


def parent_keypaths(keypath: str) -> List[str]:
    """
    List the ancestors of a keypath, nearest first.

    Example: ``"a.b.c"`` -> ``["a.b", "a"]``
    """
    segments = split_keypath(keypath)
    return [".".join(segments[:i]) for i in range(len(segments) - 1, 0, -1)]
