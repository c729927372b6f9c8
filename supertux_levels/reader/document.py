"""Parsed level documents.

``ReaderDocument`` owns the tree produced from a stream or file and hands out
``ReaderObject`` views over its lists. The tree itself is made of ``ListNode``
instances whose first item is normally a ``Symbol`` naming the node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, List, Union

from .errors import ParserError
from .lexer import Token, TokenType, tokenize


class Symbol(str):
    """Bare identifier in a document, kept distinct from quoted strings."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Symbol({str.__repr__(self)})"


@dataclass
class ListNode:
    """Parenthesised list together with the line it was opened on."""

    items: List[Any] = field(default_factory=list)
    line: int = 0

    @property
    def head(self) -> Any:
        return self.items[0] if self.items else None


def _build_tree(tokens: List[Token]) -> List[Any]:
    stack: List[ListNode] = []
    top: List[Any] = []
    for token in tokens:
        if token.type is TokenType.OPEN:
            stack.append(ListNode(line=token.line))
        elif token.type is TokenType.CLOSE:
            if not stack:
                raise ParserError("unexpected ')'", line=token.line)
            node = stack.pop()
            (stack[-1].items if stack else top).append(node)
        else:
            value = Symbol(token.value) if token.type is TokenType.SYMBOL else token.value
            (stack[-1].items if stack else top).append(value)
    if stack:
        raise ParserError("unexpected end of document, missing ')'", line=stack[-1].line)
    return top


def parse_text(text: str, context: str) -> ListNode:
    """Parses ``text`` and returns its single top-level list.

    Args:
        text (str): Document contents.
        context (str): Filename or label used in error messages.

    Returns:
        ListNode: The root list of the document.

    Raises:
        ParserError: If the text is not exactly one well-formed list.
    """
    try:
        top = _build_tree(list(tokenize(text)))
    except ParserError as e:
        raise e.with_context(context) from None
    if not top:
        raise ParserError("document is empty", context=context)
    if not isinstance(top[0], ListNode):
        raise ParserError("expected a list at the top level", context=context)
    if len(top) > 1:
        extra = top[1]
        line = extra.line if isinstance(extra, ListNode) else None
        raise ParserError("unexpected content after the root element", context=context, line=line)
    return top[0]


class ReaderObject:
    """Named node of a document: ``(name child child ...)``."""

    def __init__(self, document: ReaderDocument, node: ListNode) -> None:
        if not isinstance(node.head, Symbol):
            raise ParserError("expected a symbol at the start of the list", context=document.filename, line=node.line)
        self.document = document
        self.node = node

    @property
    def name(self) -> str:
        return str(self.node.head)

    def get_mapping(self):
        from .mapping import ReaderMapping

        return ReaderMapping(self.document, self.node)


class ReaderDocument:
    """Document tree read from a stream or file.

    Attributes:
        filename (str): Path or context label identifying the source.
        root (ListNode): Top-level list of the document.
    """

    def __init__(self, filename: str, root: ListNode) -> None:
        self.filename = filename
        self.root = root

    @classmethod
    def from_stream(cls, stream: IO[Any], context: str) -> ReaderDocument:
        """Reads a whole document from an open text or binary stream.

        Args:
            stream: File-like object; bytes are decoded as UTF-8.
            context (str): Label used in diagnostics.
        """
        data = stream.read()
        if isinstance(data, bytes):
            try:
                data = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParserError(f"document is not valid UTF-8: {e}", context=context) from e
        return cls(context, parse_text(data, context))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> ReaderDocument:
        with open(path, "rb") as handle:
            return cls.from_stream(handle, str(path))

    def get_root(self) -> ReaderObject:
        return ReaderObject(self, self.root)

    def get_filename(self) -> str:
        return self.filename
