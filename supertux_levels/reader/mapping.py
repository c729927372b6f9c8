"""Typed, read-only access to the fields of a document node.

A mapping is a list of the form ``(name (key value...) (key value...) ...)``.
Lookups return the first child with a matching key; ``items`` walks every
child in document order, which is how repeated entries such as ``sector`` or
``tilemap`` are consumed.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Tuple, TYPE_CHECKING

from .document import ListNode, ReaderObject, Symbol
from .errors import ParserError

if TYPE_CHECKING:  # pragma: no cover - assist typing only
    from .document import ReaderDocument

TRANSLATION_MARKER = "_"


class ReaderMapping:
    """Field reader over the children of a single list node.

    Args:
        document (ReaderDocument): Owning document, used for error context.
        node (ListNode): List whose children are ``(key value...)`` entries.

    Raises:
        ParserError: If a child is not a list starting with a symbol.
    """

    def __init__(self, document: "ReaderDocument", node: ListNode) -> None:
        self.document = document
        self.node = node
        for child in node.items[1:]:
            if not isinstance(child, ListNode) or not isinstance(child.head, Symbol):
                line = child.line if isinstance(child, ListNode) else node.line
                raise ParserError(
                    f"malformed entry in '{node.head}': expected (key value...)",
                    context=document.filename,
                    line=line,
                )

    @property
    def context(self) -> str:
        return self.document.filename

    def _error(self, message: str, child: ListNode) -> ParserError:
        return ParserError(message, context=self.context, line=child.line)

    def _find(self, key: str) -> Optional[ListNode]:
        for child in self.node.items[1:]:
            if child.head == key:
                return child
        return None

    def _values(self, child: ListNode) -> List[Any]:
        values = []
        for value in child.items[1:]:
            if isinstance(value, ListNode) and value.head == TRANSLATION_MARKER:
                if len(value.items) != 2 or not _is_string(value.items[1]):
                    raise self._error(f"'{child.head}': translatable entry must hold one string", child)
                value = value.items[1]
            values.append(value)
        return values

    def _single(self, key: str, child: ListNode) -> Any:
        values = self._values(child)
        if len(values) != 1:
            raise self._error(f"'{key}': expected a single value, got {len(values)}", child)
        return values[0]

    def has(self, key: str) -> bool:
        return self._find(key) is not None

    def items(self) -> Iterator[Tuple[str, ReaderObject]]:
        """Yields ``(key, ReaderObject)`` for each child in document order."""
        for child in self.node.items[1:]:
            yield str(child.head), ReaderObject(self.document, child)

    def get(self, key: str, default: Any = None) -> Any:
        """Returns the raw value stored under ``key``.

        A single value is returned as-is, several values as a list and nested
        lists as ``ListNode``. Missing keys return ``default``.
        """
        child = self._find(key)
        if child is None:
            return default
        values = self._values(child)
        if len(values) == 1:
            return values[0]
        return values

    def get_string(self, key: str, default: Any = None) -> Any:
        child = self._find(key)
        if child is None:
            return default
        value = self._single(key, child)
        if not _is_string(value):
            raise self._error(f"'{key}': expected string, got {_describe(value)}", child)
        return str(value)

    def get_int(self, key: str, default: Any = None) -> Any:
        child = self._find(key)
        if child is None:
            return default
        value = self._single(key, child)
        if not _is_int(value):
            raise self._error(f"'{key}': expected integer, got {_describe(value)}", child)
        return value

    def get_float(self, key: str, default: Any = None) -> Any:
        child = self._find(key)
        if child is None:
            return default
        value = self._single(key, child)
        if not _is_number(value):
            raise self._error(f"'{key}': expected number, got {_describe(value)}", child)
        return float(value)

    def get_bool(self, key: str, default: Any = None) -> Any:
        child = self._find(key)
        if child is None:
            return default
        value = self._single(key, child)
        if not isinstance(value, bool):
            raise self._error(f"'{key}': expected boolean, got {_describe(value)}", child)
        return value

    def get_int_list(self, key: str, default: Any = None) -> Any:
        child = self._find(key)
        if child is None:
            return default
        values = self._values(child)
        for value in values:
            if not _is_int(value):
                raise self._error(f"'{key}': expected integers, got {_describe(value)}", child)
        return values

    def get_float_list(self, key: str, default: Any = None) -> Any:
        child = self._find(key)
        if child is None:
            return default
        values = self._values(child)
        for value in values:
            if not _is_number(value):
                raise self._error(f"'{key}': expected numbers, got {_describe(value)}", child)
        return [float(value) for value in values]

    def get_mapping(self, key: str) -> Optional["ReaderMapping"]:
        child = self._find(key)
        if child is None:
            return None
        return ReaderMapping(self.document, child)

    def to_dict(self) -> dict:
        """Converts the children into plain Python values.

        Nested mappings become dicts, multi-value entries become lists and a
        key that appears more than once is collected into a ``RepeatedField``.
        """
        result: dict = {}
        for child in self.node.items[1:]:
            key = str(child.head)
            values = self._values(child)
            if values and all(_is_entry(v) for v in values):
                value: Any = ReaderMapping(self.document, child).to_dict()
            elif len(values) == 1:
                value = _plain(values[0])
            else:
                value = [_plain(v) for v in values]

            if key not in result:
                result[key] = value
            elif isinstance(result[key], RepeatedField):
                result[key].append(value)
            else:
                result[key] = RepeatedField([result[key], value])
        return result


class RepeatedField(list):
    """Values of a key that occurs several times in one mapping."""


def object_properties(obj: ReaderObject) -> dict:
    """Converts a named node into a property dict.

    ``(coin (x 1) (y 2))`` becomes ``{"x": 1, "y": 2}``; a node holding bare
    values such as ``(background "sky.png")`` becomes ``{"value": "sky.png"}``.
    """
    items = obj.node.items[1:]
    if all(_is_entry(item) for item in items):
        return ReaderMapping(obj.document, obj.node).to_dict()
    values = [
        _plain(item.items[1]) if isinstance(item, ListNode) and item.head == TRANSLATION_MARKER and len(item.items) == 2
        else _plain(item)
        for item in items
    ]
    return {"value": values[0] if len(values) == 1 else values}


def _is_entry(value: Any) -> bool:
    return isinstance(value, ListNode) and isinstance(value.head, Symbol) and value.head != TRANSLATION_MARKER


def _plain(value: Any) -> Any:
    if isinstance(value, ListNode):
        return [_plain(item) for item in value.items]
    return str(value) if isinstance(value, Symbol) else value


def _is_string(value: Any) -> bool:
    return isinstance(value, str) and not isinstance(value, Symbol)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _describe(value: Any) -> str:
    if isinstance(value, ListNode):
        return "list"
    if isinstance(value, Symbol):
        return f"symbol '{value}'"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    return type(value).__name__
