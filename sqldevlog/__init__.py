"""sqldevlog: colorized, parameter-inlined SQL for development logs."""

from sqldevlog import exceptions, utils
from sqldevlog.__metadata__ import __version__
from sqldevlog.colors import PARAMETER_COLOR, Color, annotate, statement_color
from sqldevlog.config import DevLoggerConfig
from sqldevlog.dialects import MYSQL, POSTGRES, SQLITE, TDS, Dialect, DialectName, MarkerStyle, get_dialect
from sqldevlog.duration import DEFAULT_THRESHOLDS, DurationThreshold, classify
from sqldevlog.events import QueryEvent, QueryMetadata, create_event
from sqldevlog.exceptions import (
    DevLogError,
    ImproperConfigurationError,
    ParameterCountMismatchError,
    UnsupportedDialectError,
)
from sqldevlog.formatter import DevLogger, condense_stacktrace, create_event_handler, format_event
from sqldevlog.inline import inline_params
from sqldevlog.render import render
from sqldevlog.scanner import PlaceholderOccurrence, scan
from sqldevlog.values import (
    Array,
    Binary,
    Boolean,
    Composite,
    DateTime,
    Decimal,
    Integer,
    Json,
    Null,
    Text,
    Value,
    to_value,
)

__all__ = (
    "DEFAULT_THRESHOLDS",
    "MYSQL",
    "PARAMETER_COLOR",
    "POSTGRES",
    "SQLITE",
    "TDS",
    "Array",
    "Binary",
    "Boolean",
    "Color",
    "Composite",
    "DateTime",
    "Decimal",
    "DevLogError",
    "DevLogger",
    "DevLoggerConfig",
    "Dialect",
    "DialectName",
    "DurationThreshold",
    "ImproperConfigurationError",
    "Integer",
    "Json",
    "MarkerStyle",
    "Null",
    "ParameterCountMismatchError",
    "PlaceholderOccurrence",
    "QueryEvent",
    "QueryMetadata",
    "Text",
    "UnsupportedDialectError",
    "Value",
    "__version__",
    "annotate",
    "classify",
    "condense_stacktrace",
    "create_event",
    "create_event_handler",
    "exceptions",
    "format_event",
    "get_dialect",
    "inline_params",
    "render",
    "scan",
    "statement_color",
    "to_value",
    "utils",
)
