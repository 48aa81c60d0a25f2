from __future__ import annotations

import pytest

from ember_lang.internals import errors as er
from ember_lang.internals.report import Reporter, Span


@pytest.mark.parametrize("code, exc_type, kwargs", [
    ("CE0101", er.UnknownType, {"type": "f32"}),
    ("CE0102", er.UndefinedSymbol, {"name": "x"}),
    ("CE0103", er.UndefinedFunction, {"name": "f"}),
    ("CE0104", er.UnsupportedOperator, {"op": "%"}),
    ("CE0105", er.ArgumentCountMismatch, {"name": "f", "expected": 2, "got": 1}),
    ("CE0106", er.UndefinedSymbol, {"name": "x"}),
    ("CE0201", er.TargetResolutionFailure, {"triple": "bogus", "reason": "no target"}),
    ("CE0202", er.FileOpenFailure, {"path": "/nope/out.o", "reason": "No such file"}),
    ("CE0203", er.MalformedModule, {"when": "pre-emission", "reason": "bad"}),
])
def test_codes_raise_their_exception_class(code, exc_type, kwargs):
    with pytest.raises(exc_type) as exc:
        er.raise_codegen_error(code, **kwargs)
    assert exc.value.code == code
    assert isinstance(exc.value, er.CodegenError)


def test_message_is_formatted_from_registry():
    with pytest.raises(er.ArgumentCountMismatch) as exc:
        er.raise_codegen_error("CE0105", name="f", expected=2, got=1)
    assert exc.value.message == "function 'f' expects 2 argument(s), got 1"


def test_missing_format_key_names_the_code():
    with pytest.raises(KeyError, match="CE0102"):
        er.raise_codegen_error("CE0102")


def test_unknown_code_is_rejected():
    with pytest.raises(KeyError):
        er.raise_codegen_error("CE9999")


def test_internal_errors_are_codegen_errors():
    with pytest.raises(er.InternalCompilerError) as exc:
        er.raise_internal_error("CE0016")
    assert isinstance(exc.value, er.CodegenError)


def test_duplicate_registration_fails():
    with pytest.raises(ValueError):
        er._add(er.REGISTRY["CE0101"])


def test_report_records_diagnostic():
    r = Reporter(filename="prog.em")
    try:
        er.raise_codegen_error("CE0102", name="y")
    except er.CodegenError as e:
        er.report(r, e, Span(3, 5, 3, 6))

    assert r.has_errors
    assert r.format(use_color=False) == "prog.em:3:5: error [CE0102]: undefined symbol 'y'."


def test_raised_span_is_reported_by_default():
    span = Span(7, 2, 7, 9)
    with pytest.raises(er.UndefinedFunction) as exc:
        er.raise_codegen_error("CE0103", span=span, name="g")
    assert exc.value.span == span

    r = Reporter(filename="prog.em")
    er.report(r, exc.value)
    assert r.items[0].span == span
    assert r.format(use_color=False).startswith("prog.em:7:2: error [CE0103]")


def test_colored_format_keeps_code_and_message():
    r = Reporter()
    r.error("CE0104", "unsupported operator '%'")
    text = r.format(use_color=True)
    assert "CE0104" in text
    assert "\x1b[" in text
