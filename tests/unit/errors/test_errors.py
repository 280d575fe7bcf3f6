"""Unit tests for the error registry, matchers and factory."""

import io

import pytest

from quire_core.errors import (
    ErrorCategory,
    ErrorFactory,
    ErrorRegistry,
    QuireError,
    create_error,
    get_error_factory,
    wrap_error,
)
from quire_core.errors.registry import op_gerund


class TestOpGerund:
    """Tests for op_gerund()."""

    @pytest.mark.parametrize(
        "op,expected",
        [("write", "Writing"), ("read", "Reading"), ("open", "Opening")],
    )
    def test_gerund(self, op, expected):
        assert op_gerund(op) == expected


class TestErrorRegistry:
    """Tests for ErrorRegistry."""

    def test_builtin_codes(self):
        """All built-in codes are registered."""
        registry = ErrorRegistry()
        assert set(registry.list_codes()) == {
            "IO_ERROR",
            "PARSE_ERROR",
            "FILE_NOT_FOUND",
            "CONFIG_INVALID",
            "INTERNAL_ERROR",
        }

    @pytest.mark.parametrize(
        "code,exit_code",
        [
            ("IO_ERROR", 1),
            ("PARSE_ERROR", 2),
            ("FILE_NOT_FOUND", 3),
            ("CONFIG_INVALID", 5),
            ("INTERNAL_ERROR", 6),
        ],
    )
    def test_exit_codes(self, code, exit_code):
        assert ErrorRegistry().get_template(code).default_exit_code == exit_code

    def test_unknown_code_raises(self):
        with pytest.raises(ValueError, match="Unknown error code"):
            ErrorRegistry().create("NOPE")

    def test_io_error_message(self):
        """IO errors read as '<Op>ing <subject> failed'."""
        error = ErrorRegistry().create(
            "IO_ERROR", {"op": "write", "subject": "title tag", "reason": "disk full"}
        )
        assert error.message == "Writing title tag failed"
        assert error.detail == "disk full"
        assert error.category == ErrorCategory.IO
        assert error.subject == "title tag"
        assert error.op == "write"

    def test_missing_context_keeps_template(self):
        """Templates with unknown variables are returned as-is."""
        error = ErrorRegistry().create("PARSE_ERROR", {"kind": "unformatted input"})
        assert error.message == "Failed to parse {kind} for {subject}"


class TestQuireError:
    """Tests for QuireError."""

    def test_is_exception(self):
        error = create_error("CONFIG_INVALID", detail="bad")
        assert isinstance(error, Exception)
        assert str(error) == "Invalid configuration"

    def test_to_dict(self):
        error = create_error(
            "PARSE_ERROR",
            kind="unformatted input",
            subject="post.html",
            position=7,
            fragment="wat",
            reason="unrecognised format specifier wat at position 7",
        )
        data = error.to_dict()

        assert data["code"] == "PARSE_ERROR"
        assert data["category"] == "PARSE"
        assert data["exit_code"] == 2
        assert data["position"] == 7
        assert data["fragment"] == "wat"
        assert data["cause"] is None

    def test_with_context_returns_copy(self):
        error = create_error("IO_ERROR", op="write", subject="x", reason="y")
        tagged = error.with_context(output_name="post.html")

        assert tagged.output_name == "post.html"
        assert error.output_name is None
        assert tagged.message == error.message

    def test_with_context_keeps_existing_name(self):
        error = create_error("IO_ERROR", op="write", subject="x", reason="y", output_name="a")
        assert error.with_context(output_name=None).output_name == "a"

    def test_print_error(self):
        out = io.StringIO()
        create_error("IO_ERROR", op="write", subject="title tag", reason="disk full").print_error(out)
        assert out.getvalue() == "Writing title tag failed: disk full.\n"

    def test_print_file_not_found(self):
        out = io.StringIO()
        create_error("FILE_NOT_FOUND", path="$ROOT/x.css", subject="file style element").print_error(out)
        assert out.getvalue() == "File $ROOT/x.css for file style element not found.\n"


class TestErrorFactory:
    """Tests for ErrorFactory and its matchers."""

    def test_file_not_found(self):
        error = wrap_error(
            FileNotFoundError(2, "No such file", "/tmp/x.css"),
            subject="file style element",
            path="$ROOT/x.css",
        )
        assert error.code == "FILE_NOT_FOUND"
        assert error.path == "$ROOT/x.css"
        assert error.exit_code == 3

    def test_file_not_found_path_from_exception(self):
        error = wrap_error(FileNotFoundError(2, "No such file", "/tmp/x.css"), subject="s")
        assert error.path == "/tmp/x.css"

    def test_unicode_error(self):
        exc = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        error = wrap_error(exc, subject="file script element")
        assert error.code == "PARSE_ERROR"
        assert error.message == "Failed to parse UTF-8 string for file script element"

    def test_os_error(self):
        error = wrap_error(PermissionError(13, "Permission denied"), op="read", subject="s")
        assert error.code == "IO_ERROR"
        assert error.message == "Reading s failed"

    def test_generic_error(self):
        error = ErrorFactory().from_exception(RuntimeError("boom"))
        assert error.code == "INTERNAL_ERROR"
        assert error.message == "Internal error (RuntimeError)"
        assert error.detail == "boom"

    def test_quire_error_passthrough(self):
        original = create_error("CONFIG_INVALID", detail="bad")
        error = wrap_error(original, output_name="feed.xml")
        assert error.code == "CONFIG_INVALID"
        assert error.output_name == "feed.xml"

    def test_singleton(self):
        assert get_error_factory() is get_error_factory()

    def test_raise_and_catch(self):
        with pytest.raises(QuireError) as exc_info:
            raise create_error("IO_ERROR", op="write", subject="s", reason="r")
        assert exc_info.value.code == "IO_ERROR"
