"""Core exception hierarchy."""

class StubflowError(Exception):
    """Base class for stubflow errors."""


class ModelError(StubflowError):
    """API model parsing error."""


class UnknownOperationError(StubflowError):
    """The API model does not declare the requested operation."""


class ParamValidationError(StubflowError, ValueError):
    """Data does not conform to a shape."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        count = len(self.errors)
        noun = "error" if count == 1 else "errors"
        lines = [f"{count} validation {noun} detected:"]
        lines.extend(f"  - {err}" for err in self.errors)
        super().__init__("\n".join(lines))


class UnsupportedProtocolError(StubflowError):
    """The API model names a wire protocol with no stub support."""


class NoOutputError(StubflowError, ValueError):
    """Stub data was given for an operation that returns no data."""


class ResponseParseError(StubflowError):
    """An HTTP response body could not be decoded."""
