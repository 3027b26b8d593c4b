import io

import pytest
from pydantic import ValidationError

from kernel_helper.errors import LineTooLongError, MissingTerminatorError
from kernel_helper.models import ConvertOptions, LineKind
from kernel_helper.transform import (
    classify_line,
    convert_text,
    measure_line,
    process_kernel,
    process_line,
    transform_line,
)

EXAMPLE = "__kernel void f(int x) {\n\n    return;\n}\n"


def test_process_line_wraps_without_escaping():
    line = 'printf("a\\b");'
    out = process_line(line)
    assert out == '"' + line + ' \\n"\n'
    assert len(out.rstrip("\n")) == len(line) + 5


@pytest.mark.parametrize("text", ["", " ", "\t", "  \t \r", "\v\f"])
def test_whitespace_lines_are_blank(text):
    assert classify_line(text) is LineKind.BLANK


@pytest.mark.parametrize("text", ["x", "   }", "{   ", " \t;\t "])
def test_any_visible_character_is_content(text):
    assert classify_line(text) is LineKind.CONTENT


def test_blank_record_ignores_whitespace_content():
    options = ConvertOptions(include_blank_lines=True)
    assert transform_line("\n", options) == '" \\n"\n'
    assert transform_line("    \t\n", options) == '" \\n"\n'
    assert transform_line("    \t\n") is None


def test_end_to_end_without_blank_lines():
    out, report = convert_text(EXAMPLE)
    assert out.splitlines() == [
        '"__kernel void f(int x) { \\n"',
        '"    return; \\n"',
        '"} \\n"',
    ]
    assert report.lines_read == 4
    assert report.blank_lines == 1
    assert report.records_written == report.lines_read - report.blank_lines


def test_end_to_end_with_blank_lines():
    out, report = convert_text(EXAMPLE, ConvertOptions(include_blank_lines=True))
    lines = out.splitlines()
    assert len(lines) == 4
    assert lines[1] == '" \\n"'
    assert report.blank_lines_emitted == 1


def test_content_records_round_trip():
    out, _ = convert_text(EXAMPLE)
    bodies = [line[1:-len(' \\n"')] for line in out.splitlines()]
    assert bodies == [line for line in EXAMPLE.splitlines() if line.strip()]


def test_measure_line_limits():
    assert measure_line("x" * 127 + "\n") == (127, True)
    assert measure_line("abc") == (3, False)

    with pytest.raises(LineTooLongError) as excinfo:
        measure_line("x" * 128 + "\n", line_number=7)
    assert excinfo.value.line_number == 7

    assert measure_line("x" * 500 + "\n", max_length=None) == (500, True)


def test_long_line_stops_the_run_and_keeps_earlier_records():
    src = io.StringIO("int a;\n" + "y" * 200 + "\nint b;\n")
    out = io.StringIO()

    with pytest.raises(LineTooLongError) as excinfo:
        process_kernel(src, out)

    assert excinfo.value.line_number == 2
    assert out.getvalue() == '"int a; \\n"\n'


def test_unlimited_line_length():
    out, report = convert_text("z" * 1000 + "\n", ConvertOptions(max_line_length=None))
    assert out == '"' + "z" * 1000 + ' \\n"\n'
    assert report.content_lines == 1


def test_missing_trailing_newline_is_implicit_terminator():
    out, report = convert_text("a\nb")
    assert out == '"a \\n"\n"b \\n"\n'
    assert report.trailing_newline is False


def test_missing_trailing_newline_strict():
    src = io.StringIO("a\nb")
    out = io.StringIO()

    with pytest.raises(MissingTerminatorError):
        process_kernel(src, out, ConvertOptions(require_trailing_newline=True))

    assert out.getvalue() == '"a \\n"\n'


def test_verbose_echoes_records():
    echo = io.StringIO()
    out = io.StringIO()
    options = ConvertOptions(verbose=True, include_blank_lines=True)

    process_kernel(io.StringIO(EXAMPLE), out, options, echo=echo)

    assert echo.getvalue() == out.getvalue()


def test_quiet_run_leaves_echo_untouched():
    echo = io.StringIO()
    process_kernel(io.StringIO(EXAMPLE), io.StringIO(), echo=echo)
    assert echo.getvalue() == ""


def test_empty_input():
    out, report = convert_text("")
    assert out == ""
    assert report.lines_read == 0
    assert report.trailing_newline is True


def test_options_are_immutable():
    options = ConvertOptions()
    with pytest.raises(ValidationError):
        options.verbose = True


def test_lone_carriage_return_stays_in_line():
    out, report = convert_text("a\rb\n")
    assert out == '"a\rb \\n"\n'
    assert report.lines_read == 1


def test_carriage_return_does_not_trip_strict_mode():
    src = io.StringIO("a\rb\nc\r\n", newline="\n")
    out = io.StringIO(newline="\n")

    report = process_kernel(src, out, ConvertOptions(require_trailing_newline=True))

    assert out.getvalue() == '"a\rb \\n"\n"c\r \\n"\n'
    assert report.trailing_newline is True
