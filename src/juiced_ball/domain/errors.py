from __future__ import annotations

from dataclasses import dataclass


class JuicedBallException(Exception):
    """Base class for errors raised by the analysis pipeline."""


class ConfigError(JuicedBallException):
    """Raised when analysis settings are invalid."""


class MalformedDateError(JuicedBallException):
    def __init__(self, raw: str, formats: tuple[str, ...]) -> None:
        self.raw = raw
        self.formats = formats
        super().__init__(f"Date {raw!r} matches none of the accepted formats {', '.join(formats)}")


class SchemaError(JuicedBallException):
    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


class UndefinedBreakpointError(JuicedBallException):
    def __init__(self, target_year: int) -> None:
        self.target_year = target_year
        super().__init__(f"No batted balls recorded for season {target_year}; breakpoint is undefined")


class InsufficientSampleError(JuicedBallException):
    def __init__(self, operation: str, message: str, sizes: tuple[int, ...] = ()) -> None:
        self.operation = operation
        self.sizes = sizes
        super().__init__(f"{operation}: {message}")


@dataclass(frozen=True)
class RowError:
    """A raw row that was skipped during normalization."""

    row_index: int
    kind: str
    message: str


@dataclass(frozen=True)
class StepError:
    """An analysis step that could not run on the inputs it was given."""

    step: str
    message: str
    sizes: tuple[int, ...] = ()
