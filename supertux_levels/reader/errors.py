from typing import Optional


class ParserError(ValueError):
    """Raised for syntax errors and mistyped fields in a level document.

    Args:
        message (str): Description of the problem.
        context (Optional[str]): Filename or stream label of the document.
        line (Optional[int]): 1-based line number where the problem was found.
    """

    def __init__(self, message: str, context: Optional[str] = None, line: Optional[int] = None) -> None:
        self.message = message
        self.context = context
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        if self.context is None and self.line is None:
            return self.message
        location = self.context or "<unknown>"
        if self.line is not None:
            location = f"{location}:{self.line}"
        return f"{location}: {self.message}"

    def with_context(self, context: str) -> "ParserError":
        """Returns a copy of this error labelled with the document context."""
        return ParserError(self.message, context=context, line=self.line)
