"""Exception hierarchy for ABAQUS input parsing."""

from typing import Optional


class AbaqusReaderError(Exception):
    """Base class for all errors raised by abaqusreader."""


class ParseError(AbaqusReaderError):
    """Malformed input that a required section cannot be built from."""

    def __init__(self, message: str, keyword: Optional[str] = None,
                 line_number: Optional[int] = None):
        self.message = message
        self.keyword = keyword
        self.line_number = line_number
        super().__init__(self._render())

    def _render(self) -> str:
        where = []
        if self.keyword:
            where.append(f"*{self.keyword}")
        if self.line_number is not None:
            where.append(f"line {self.line_number}")
        if where:
            return f"{self.message} ({', '.join(where)})"
        return self.message

    def locate(self, keyword: str, line_number: int) -> "ParseError":
        """Fill in the section location if the raiser did not know it."""
        if self.keyword is None:
            self.keyword = keyword
        if self.line_number is None:
            self.line_number = line_number
        self.args = (self._render(),)
        return self

    def __str__(self) -> str:
        return self._render()


class UnknownElementError(ParseError):
    """ELEMENT block uses a TYPE= code that is not in the element database."""

    def __init__(self, code: str, keyword: Optional[str] = None,
                 line_number: Optional[int] = None):
        self.code = code
        message = (
            f"Unknown ABAQUS element type: {code}. Register it before parsing, "
            f"e.g. register_element(\"{code}\", num_nodes, \"Hex8\")"
        )
        super().__init__(message, keyword=keyword, line_number=line_number)


class SectionContextError(AbaqusReaderError):
    """A section appeared where its required context is missing or its data has the wrong shape."""


class ModelValidationError(AbaqusReaderError):
    """A fully parsed model does not satisfy the minimum content requirements."""


class SurfaceError(AbaqusReaderError):
    """A surface cannot be materialized into face elements."""
