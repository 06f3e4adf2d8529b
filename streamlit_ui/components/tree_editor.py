"""Editable control tree for JSON-like values and path-addressed updates.

build_control() mirrors the read-only renderer but yields input controls.
Each leaf control knows the path it edits and how to parse the raw widget
value back into JSON; apply_update() writes that value into a fresh clone
of the working copy.
"""
import copy
import math
import re
from dataclasses import dataclass
from typing import Any, Optional, Union

from streamlit_ui.components.tree_renderer import DEFAULT_MAX_DEPTH, CyclicValueError, DepthLimitError
from streamlit_ui.utils.json_paths import NOT_PROVIDED, Path, format_key, format_number, format_path, is_missing

YES = "Yes"
NO = "No"

# Leading numeric prefix, so "12abc" -> 12 and "abc" -> no match
_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_string_list(text: str) -> list[str]:
    """Split multi-line text into trimmed, non-empty lines."""
    return [line.strip() for line in (text or "").split("\n") if line.strip()]


def parse_number(raw: Any) -> Union[int, float]:
    """Parse user input as a float; anything unparseable (or NaN/inf/0) becomes 0.

    Integral results are returned as int so 5 stays 5 in the saved JSON.
    """
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        number = float(raw)
    else:
        match = _NUMBER_PREFIX.match(str(raw or ""))
        if not match:
            return 0
        number = float(match.group(0))
    if math.isnan(number) or math.isinf(number) or number == 0:
        return 0
    return int(number) if number.is_integer() else number


def parse_choice(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return raw == YES


@dataclass(frozen=True)
class TextAreaControl:
    """One line per list item."""
    path: Path
    display: str
    rows: int

    def parse(self, raw: str) -> list[str]:
        return parse_string_list(raw)

    @property
    def key(self) -> str:
        return format_path(self.path)


@dataclass(frozen=True)
class ChoiceControl:
    path: Path
    display: str
    options: tuple[str, str] = (YES, NO)

    def parse(self, raw: Any) -> bool:
        return parse_choice(raw)

    @property
    def index(self) -> int:
        return self.options.index(self.display)

    @property
    def key(self) -> str:
        return format_path(self.path)


@dataclass(frozen=True)
class NumberControl:
    path: Path
    display: str

    def parse(self, raw: Any) -> Union[int, float]:
        return parse_number(raw)

    @property
    def key(self) -> str:
        return format_path(self.path)


@dataclass(frozen=True)
class TextControl:
    path: Path
    display: str
    placeholder: Optional[str] = None

    def parse(self, raw: Any) -> str:
        # An emptied field is stored as "", never reverted to null
        return "" if raw is None else str(raw)

    @property
    def key(self) -> str:
        return format_path(self.path)


LeafControl = Union[TextAreaControl, ChoiceControl, NumberControl, TextControl]


@dataclass(frozen=True)
class Field:
    label: str
    control: "Control"


@dataclass(frozen=True)
class FieldGroup:
    path: Path
    fields: tuple[Field, ...]


@dataclass(frozen=True)
class ItemGroup:
    title: str
    path: Path
    fields: tuple[Field, ...]


@dataclass(frozen=True)
class ItemListControl:
    path: Path
    items: tuple[ItemGroup, ...]


Control = Union[LeafControl, FieldGroup, ItemListControl]


def build_control(value: Any, path: Path = (), max_depth: int = DEFAULT_MAX_DEPTH) -> Control:
    """Select the editing control for value located at path in the working copy."""
    return _build(value, tuple(path), ancestors=(), max_depth=max_depth)


def _build(value: Any, path: Path, ancestors: tuple[int, ...], max_depth: int) -> Control:
    if isinstance(value, (dict, list)):
        if id(value) in ancestors:
            raise CyclicValueError(f"Cannot edit self-referencing value at {format_path(path)}")
        if len(ancestors) >= max_depth:
            raise DepthLimitError(f"Value at {format_path(path)} nests deeper than {max_depth} levels")
        ancestors = ancestors + (id(value),)

    if isinstance(value, list):
        if all(isinstance(item, str) for item in value):
            return TextAreaControl(path=path, display="\n".join(value), rows=len(value) + 1)
        items = []
        for index, item in enumerate(value):
            item_path = path + (index,)
            if isinstance(item, dict):
                fields = tuple(
                    Field(format_key(key), _build(val, item_path + (key,), ancestors, max_depth))
                    for key, val in item.items()
                )
            else:
                fields = (Field("Value", _build(item, item_path, ancestors, max_depth)),)
            items.append(ItemGroup(title=f"Item {index + 1}", path=item_path, fields=fields))
        return ItemListControl(path=path, items=tuple(items))

    if isinstance(value, dict):
        return FieldGroup(
            path=path,
            fields=tuple(
                Field(format_key(key), _build(val, path + (key,), ancestors, max_depth))
                for key, val in value.items()
            ),
        )

    if isinstance(value, bool):
        return ChoiceControl(path=path, display=YES if value else NO)

    if isinstance(value, (int, float)):
        return NumberControl(path=path, display=format_number(value))

    if is_missing(value):
        return TextControl(path=path, display="", placeholder=NOT_PROVIDED)
    return TextControl(path=path, display=str(value))


def iter_leaves(control: Control):
    """Yield every leaf control in document order."""
    if isinstance(control, FieldGroup):
        for f in control.fields:
            yield from iter_leaves(f.control)
    elif isinstance(control, ItemListControl):
        for item in control.items:
            for f in item.fields:
                yield from iter_leaves(f.control)
    else:
        yield control


def apply_update(working_copy: Any, path: Path, value: Any) -> Any:
    """Return a deep clone of working_copy with value assigned at path.

    The input is never mutated; an empty path replaces the whole value.
    """
    if not path:
        return copy.deepcopy(value)
    clone = copy.deepcopy(working_copy)
    current = clone
    for segment in path[:-1]:
        current = current[segment]
    current[path[-1]] = value
    return clone
