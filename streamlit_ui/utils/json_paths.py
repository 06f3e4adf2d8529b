"""Helpers for JSON-like values: labels, null markers and path lookups."""
import json
from typing import Any, Union

PathSegment = Union[str, int]
Path = tuple[PathSegment, ...]

NOT_PROVIDED = "Not provided"
NONE_LABEL = "None"


def format_key(key: Any) -> str:
    """snake_case key -> 'Snake Case' label (first letter of each word upper-cased)."""
    return " ".join(word[:1].upper() + word[1:] for word in str(key).split("_"))


def is_missing(value: Any) -> bool:
    """True for None and the literal string "null" the extractor writes for absent fields."""
    return value is None or value == "null"


def is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def get_at_path(value: Any, path: Path) -> Any:
    """Read the value at path. Raises KeyError/IndexError when a segment is absent."""
    current = value
    for segment in path:
        current = current[segment]
    return current


def format_path(path: Path) -> str:
    """Readable form used in widget keys and log events, e.g. founders[0].name."""
    out = ""
    for segment in path:
        if isinstance(segment, int):
            out += f"[{segment}]"
        else:
            out += f".{segment}" if out else str(segment)
    return out or "<root>"


def format_number(value: Union[int, float]) -> str:
    """Integral floats drop the trailing .0, so 5.0 shows as 5."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def path_token(path: Path) -> str:
    """One-to-one encoding of a path, so ("a.b",) and ("a", "b") stay distinct."""
    return json.dumps(list(path), ensure_ascii=False)
