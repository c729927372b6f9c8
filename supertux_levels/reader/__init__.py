"""
Reader Package

Parser and writer for the S-expression text format used by level and
worldmap documents. It provides:
  - ReaderDocument: A parsed document read from a file or stream.
  - ReaderObject: A named node (``(name ...)``) inside a document.
  - ReaderMapping: Typed field reads and ordered child iteration over a node.
  - Writer: Serialisation back into the same format.
"""

from .document import ListNode, ReaderDocument, ReaderObject, Symbol
from .errors import ParserError
from .mapping import ReaderMapping, RepeatedField, object_properties
from .writer import Writer, format_value

__all__ = [
    "ListNode",
    "ParserError",
    "ReaderDocument",
    "ReaderMapping",
    "ReaderObject",
    "RepeatedField",
    "Symbol",
    "Writer",
    "format_value",
    "object_properties",
]
