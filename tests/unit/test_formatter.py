"""Unit tests for query event formatting and delivery."""

import logging
import os
import traceback

import pytest

from sqldevlog import DevLogger, DevLoggerConfig, create_event, create_event_handler, format_event
from sqldevlog.colors import PARAMETER_COLOR, RESET, Color
from sqldevlog.events import QueryEvent
from sqldevlog.exceptions import ParameterCountMismatchError, UnsupportedDialectError
from sqldevlog.formatter import _PACKAGE_DIR, condense_stacktrace
from sqldevlog.utils.logging import set_correlation_id

SELECT_POST = 'SELECT p0."id" FROM "posts" AS p0 WHERE (p0."id" = $1)'


def _literal(text: str, color: Color) -> str:
    return f"{PARAMETER_COLOR}{text}{color.escape}"


def test_fast_select_uses_statement_color() -> None:
    event = create_event(sql=SELECT_POST, params=[7], dialect="postgres", duration=0.0012, source="posts")
    line = format_event(event)
    assert line == (
        f'{Color.CYAN.escape}QUERY OK source="posts" db=1.2ms\n'
        f'SELECT p0."id" FROM "posts" AS p0 WHERE (p0."id" = {_literal("7", Color.CYAN)}){RESET}'
    )


@pytest.mark.parametrize(
    ("duration", "color"),
    [(0.02, Color.CYAN), (0.07, Color.YELLOW), (0.12, Color.RED)],
)
def test_duration_bucket_sets_line_color(duration: float, color: Color) -> None:
    event = create_event(sql=SELECT_POST, params=[7], dialect="postgres", duration=duration)
    line = format_event(event)
    assert line is not None
    assert line.startswith(f"{color.escape}QUERY OK db=")
    assert _literal("7", color) in line


def test_queue_time_counts_towards_severity() -> None:
    event = create_event(sql="SELECT 1", dialect="postgres", duration=0.03, queue_duration=0.03)
    line = format_event(event)
    assert line is not None
    assert line.startswith(Color.YELLOW.escape)
    assert "db=30.0ms queue=30.0ms" in line


def test_all_timings_are_reported() -> None:
    event = create_event(
        sql="SELECT 1",
        dialect="mysql",
        duration=0.001,
        decode_duration=0.0002,
        queue_duration=0.0003,
        idle_duration=1.5,
    )
    line = format_event(event)
    assert line is not None
    assert line.endswith("db=1.0ms decode=0.2ms queue=0.3ms idle=1500.0ms\nSELECT 1" + RESET)


def test_statement_without_keyword_color_uses_default_color() -> None:
    event = create_event(sql="CREATE TABLE t (id int)", dialect="postgres", duration=0.001)
    assert format_event(event) == f"QUERY OK db=1.0ms\nCREATE TABLE t (id int){RESET}"
    config = DevLoggerConfig(default_color=Color.WHITE)
    assert format_event(event, config) == (
        f"{Color.WHITE.escape}QUERY OK db=1.0ms\nCREATE TABLE t (id int){RESET}"
    )


def test_failed_query_and_repo_name() -> None:
    event = create_event(
        sql="DELETE FROM posts WHERE id = ?",
        params=[1],
        dialect="sqlite",
        duration=0.001,
        repo="Blog.Repo",
        succeeded=False,
    )
    line = format_event(event, DevLoggerConfig(include_repo_name=True))
    assert line is not None
    assert line.startswith(f"{Color.RED.escape}QUERY ERROR repo=Blog.Repo db=1.0ms\nDELETE FROM posts WHERE id = ")
    assert format_event(event) is not None
    assert "repo=" not in format_event(event)  # type: ignore[operator]


def test_suppressed_event_is_not_formatted() -> None:
    event = create_event(sql="SELECT 1", dialect="postgres", duration=0.001, suppress_logging=True)
    assert format_event(event) is None


def test_ignore_event_callback() -> None:
    config = DevLoggerConfig(ignore_event=lambda event: "password_digest" in event.sql)
    secret = create_event(
        sql='UPDATE "users" SET "password_digest" = $1', params=["x"], dialect="postgres", duration=0.0
    )
    public = create_event(sql='UPDATE "users" SET "name" = $1', params=["x"], dialect="postgres", duration=0.0)
    assert format_event(secret, config) is None
    assert format_event(public, config) is not None


def test_before_inline_rewrites_statement() -> None:
    config = DevLoggerConfig(before_inline=lambda sql: sql.replace("p0.", ""))
    event = create_event(sql=SELECT_POST, params=[7], dialect="postgres", duration=0.0)
    line = format_event(event, config)
    assert line is not None
    assert 'SELECT "id" FROM "posts" AS p0 WHERE ("id" = ' in line


def test_dialect_falls_back_to_config() -> None:
    event = create_event(sql="SELECT @1", params=[True], duration=0.0)
    line = format_event(event, DevLoggerConfig(dialect="mssql"))
    assert line is not None
    assert _literal("1", Color.CYAN) in line


def test_missing_dialect_fails_fast() -> None:
    event = create_event(sql="SELECT 1", duration=0.0)
    with pytest.raises(UnsupportedDialectError):
        format_event(event)


def test_parameter_mismatch_propagates() -> None:
    event = create_event(sql="SELECT $2", params=[1], dialect="postgres", duration=0.0)
    with pytest.raises(ParameterCountMismatchError):
        format_event(event)


def test_condensed_stacktrace_is_appended() -> None:
    frames = [
        traceback.FrameSummary("/srv/app/lib/driver.py", 10, "execute", lookup_line=False),
        traceback.FrameSummary("/srv/app/blog/views.py", 42, "show_post", lookup_line=False),
        traceback.FrameSummary("/srv/app/lib/driver.py", 99, "run", lookup_line=False),
    ]
    config = DevLoggerConfig(stacktrace_exclude=("/srv/app/lib",))
    event = create_event(sql="SELECT 1", dialect="postgres", duration=0.0, stacktrace=frames)
    line = format_event(event, config)
    assert line is not None
    assert line.endswith(f"{RESET}\n↳ show_post, at: /srv/app/blog/views.py:42")


def test_condense_stacktrace_without_application_frames() -> None:
    frames = [traceback.FrameSummary("/srv/app/lib/driver.py", 10, "execute", lookup_line=False)]
    assert condense_stacktrace(frames, ("/srv/app/lib",)) is None
    assert condense_stacktrace(None) is None
    assert condense_stacktrace([]) is None


def test_captured_stack_points_at_caller() -> None:
    event = create_event(sql="SELECT 1", dialect="postgres", duration=0.0, capture_stack=True)
    condensed = condense_stacktrace(event.metadata.stacktrace)
    assert condensed is not None
    assert "test_captured_stack_points_at_caller" in condensed


def test_dev_logger_delivers_to_sink() -> None:
    lines: list[str] = []
    dev_logger = DevLogger(DevLoggerConfig(sink=lines.append))
    event = create_event(sql="SELECT 1", dialect="postgres", duration=0.001)
    assert dev_logger.handle(event) == lines[0]
    dev_logger(create_event(sql="SELECT 1", dialect="postgres", duration=0.0, suppress_logging=True))
    assert len(lines) == 1


def test_dev_logger_default_sink_logs(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="sqldevlog.query")
    event = create_event(sql="SELECT $1", params=["a"], dialect="postgres", duration=0.002, source="posts")
    line = DevLogger().handle(event)
    records = [record for record in caplog.records if record.name == "sqldevlog.query"]
    assert len(records) == 1
    assert records[0].getMessage() == line
    assert records[0].levelno == logging.DEBUG
    assert records[0].extra_fields["db.statement"] == "SELECT $1"  # type: ignore[attr-defined]
    assert records[0].extra_fields["source"] == "posts"  # type: ignore[attr-defined]


def test_dev_logger_respects_log_level(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="sqldevlog.query")
    event = create_event(sql="SELECT 1", dialect="postgres", duration=0.0)
    DevLogger().handle(event)
    assert not [record for record in caplog.records if record.name == "sqldevlog.query"]
    DevLogger(DevLoggerConfig(log_level="INFO")).handle(event)
    assert [record for record in caplog.records if record.name == "sqldevlog.query"]


def test_create_event_handler() -> None:
    lines: list[str] = []
    handler = create_event_handler(DevLoggerConfig(sink=lines.append))
    handler(QueryEvent(sql="SELECT ?", params=[None], dialect="mysql", duration=0.0))
    assert lines == [f"{Color.CYAN.escape}QUERY OK db=0.0ms\nSELECT {_literal('NULL', Color.CYAN)}{RESET}"]


def test_event_as_dict() -> None:
    event = create_event(sql="SELECT $1", params=(1,), dialect="postgres", duration=0.5, source="posts", tag="x")
    payload = event.as_dict()
    assert payload["params"] == [1]
    assert payload["dialect"] == "postgres"
    assert payload["source"] == "posts"
    assert payload["succeeded"] is True
    assert event.metadata.extra == {"tag": "x"}
    assert event.total_duration == 0.5


def test_header_and_statement_are_on_separate_lines() -> None:
    event = create_event(sql="SELECT $1", params=[1], dialect="postgres", duration=0.001)
    line = format_event(event)
    assert line is not None
    header, newline, statement = line.partition("\n")
    assert newline == "\n"
    assert header == f"{Color.CYAN.escape}QUERY OK db=1.0ms"
    assert statement == f"SELECT {_literal('1', Color.CYAN)}{RESET}"


def test_sibling_directory_of_package_is_not_skipped() -> None:
    sibling = f"{_PACKAGE_DIR}_app{os.sep}views.py"
    frames = [
        traceback.FrameSummary(sibling, 7, "index", lookup_line=False),
        traceback.FrameSummary(os.path.join(_PACKAGE_DIR, "formatter.py"), 1, "format_event", lookup_line=False),
    ]
    condensed = condense_stacktrace(frames)
    assert condensed is not None
    assert condensed.startswith("↳ index, at: ")
    assert condensed.endswith(f"_app{os.sep}views.py:7")


def test_dev_logger_attaches_correlation_id(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="sqldevlog.query")
    event = create_event(sql="SELECT 1", dialect="postgres", duration=0.0)
    set_correlation_id("req-42")
    try:
        DevLogger().handle(event)
    finally:
        set_correlation_id(None)
    DevLogger().handle(event)
    records = [record for record in caplog.records if record.name == "sqldevlog.query"]
    assert records[0].extra_fields["correlation_id"] == "req-42"  # type: ignore[attr-defined]
    assert records[0].correlation_id == "req-42"  # type: ignore[attr-defined]
    assert "correlation_id" not in records[1].extra_fields  # type: ignore[attr-defined]
