from typing import Any, Optional

__all__ = (
    "DevLogError",
    "DialectError",
    "ImproperConfigurationError",
    "ParameterCountMismatchError",
    "ParameterError",
    "SerializationError",
    "UnsupportedDialectError",
)


class DevLogError(Exception):
    """Base exception class from which all sqldevlog exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``DevLogError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ImproperConfigurationError(DevLogError):
    """Improper Configuration error.

    Raised when a logger configuration value cannot be used, such as thresholds
    that are not strictly ascending.
    """


class SerializationError(DevLogError):
    """Encoding or decoding of an object failed."""


# -- Dialect Errors --
class DialectError(DevLogError):
    """Base class for dialect-related errors."""


class UnsupportedDialectError(DialectError):
    """Raised when a dialect tag does not name a supported dialect."""

    dialect: Any

    def __init__(self, dialect: Any, available: "Optional[tuple[str, ...]]" = None) -> None:
        message = f"Unsupported dialect: {dialect!r}"
        if available:
            message = f"{message}. Available: {', '.join(available)}"
        super().__init__(detail=message)
        self.dialect = dialect


# -- Parameter Errors --
class ParameterError(DevLogError):
    """Base class for parameter-related errors."""

    sql: Optional[str]

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        """Initialize with optional SQL context."""
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.sql = sql


class ParameterCountMismatchError(ParameterError):
    """Raised when a placeholder references a parameter that was not supplied."""

    index: int
    parameter_count: int

    def __init__(self, index: int, parameter_count: int, sql: Optional[str] = None) -> None:
        super().__init__(
            f"Parameter count mismatch: placeholder references parameter {index + 1} "
            f"but only {parameter_count} parameter(s) were supplied",
            sql,
        )
        self.index = index
        self.parameter_count = parameter_count
