"""Serialises values back into the S-expression level format."""

from typing import IO, Any, Iterable, Optional

import numpy as np

from supertux_levels.utils.config import Config

from .document import Symbol
from .mapping import RepeatedField

_STRING_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t"})


def format_value(value: Any) -> str:
    """Formats a scalar as a document literal.

    Args:
        value: Boolean, integer, float, string or ``Symbol``.

    Returns:
        str: Text that the lexer reads back as the same value.

    Raises:
        TypeError: If ``value`` has no literal form.
        ValueError: If ``value`` is an infinite or NaN float.
    """
    if isinstance(value, (bool, np.bool_)):
        return "#t" if value else "#f"
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    if isinstance(value, (float, np.floating)):
        if not np.isfinite(value):
            raise ValueError(f"cannot write non-finite number {value!r}")
        return repr(float(value))
    if isinstance(value, Symbol):
        return str(value)
    if isinstance(value, str):
        return '"' + value.translate(_STRING_ESCAPES) + '"'
    raise TypeError(f"cannot write value of type {type(value).__name__}")


class Writer:
    """Indenting writer producing one entry per line.

    Args:
        stream: Text stream receiving the document.
    """

    def __init__(self, stream: IO[str]) -> None:
        self.stream = stream
        self.depth = 0
        self._open_lists: list = []

    def _line(self, text: str) -> None:
        self.stream.write(" " * (self.depth * Config.INDENT_WIDTH) + text + "\n")

    def start_list(self, name: str) -> None:
        self._line(f"({name}")
        self._open_lists.append(name)
        self.depth += 1

    def end_list(self, name: str) -> None:
        if not self._open_lists or self._open_lists[-1] != name:
            raise ValueError(f"end_list('{name}') does not match the innermost open list")
        self._open_lists.pop()
        self.depth -= 1
        self._line(")")

    def write(self, key: str, value: Any, translatable: bool = False) -> None:
        """Writes ``(key value)``; sequences are written as ``(key v1 v2 ...)``.

        Dicts are written as nested mappings and a ``RepeatedField`` as one
        entry per element.
        """
        if isinstance(value, RepeatedField):
            for item in value:
                self.write(key, item, translatable=translatable)
        elif isinstance(value, dict):
            self.start_list(key)
            for sub_key, sub_value in value.items():
                self.write(sub_key, sub_value)
            self.end_list(key)
        elif isinstance(value, (list, tuple, np.ndarray)):
            self._line(f"({key}" + "".join(" " + self._format_item(item) for item in value) + ")")
        elif translatable:
            self._line(f'({key} (_ {format_value(str(value))}))')
        else:
            self._line(f"({key} {format_value(value)})")

    def write_rows(self, key: str, values: Iterable[int], row_length: Optional[int]) -> None:
        """Writes a flat integer array with ``row_length`` values per line."""
        values = [int(value) for value in values]
        if not values or not row_length:
            self.write(key, values)
            return
        self._line(f"({key}")
        self.depth += 1
        for start in range(0, len(values), row_length):
            self._line(" ".join(str(value) for value in values[start:start + row_length]))
        self.depth -= 1
        self._line(")")

    def _format_item(self, item: Any) -> str:
        if isinstance(item, (list, tuple)):
            return "(" + " ".join(self._format_item(sub) for sub in item) + ")"
        return format_value(item)
