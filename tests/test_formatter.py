import json
from ninjadiag.cli.formatter import OutputFormatter, render_classified, render_json, render_text
from ninjadiag.core.models import Diagnostic, TraceEntry
from ninjadiag.parsing.classifier import classify_line

def _diagnostic() -> Diagnostic:
    return Diagnostic(
        file="a.cc",
        line=20,
        col=5,
        message="no member named 'size'\nin instantiation of 'Box<W>' requested here",
        trace=[
            TraceEntry(file="main.cc", line=3, message="In file included "),
            TraceEntry(file="box.h", line=12, col=10, message="Original error location"),
        ],
    )

def test_render_text_with_trace():
    text = render_text([_diagnostic()])
    assert text.splitlines() == [
        "a.cc:20:5: error: no member named 'size'",
        "in instantiation of 'Box<W>' requested here",
        "    main.cc:3: In file included ",
        "    box.h:12:10: Original error location",
        "1 error(s) found.",
    ]

def test_render_text_without_trace():
    text = render_text([_diagnostic()], show_trace=False)
    assert "main.cc:3" not in text

def test_render_text_empty():
    assert render_text([]) == "0 error(s) found."

def test_render_json():
    payload = json.loads(render_json([_diagnostic()]))
    assert payload["summary"] == {"errors": 1, "total": 1}
    [item] = payload["diagnostics"]
    assert item["file"] == "a.cc"
    assert item["trace"][1] == {
        "type": "Trace",
        "text": "Original error location",
        "file": "box.h",
        "line": 12,
        "col": 10,
    }

def test_render_classified():
    rows = render_classified([
        classify_line("a.cc:1:2: error: e"),
        classify_line("1 error generated."),
    ]).splitlines()
    assert rows[0].split(None, 2)[:2] == ["1", "error"]
    assert '"file": "a.cc"' in rows[0]
    assert rows[1].split(None, 2)[:2] == ["2", "aux"]

def test_print_diagnostics_table(capsys):
    OutputFormatter.print_diagnostics([_diagnostic()])
    captured = capsys.readouterr()
    combined = f"{captured.out}{captured.err}"
    assert "Build Diagnostics" in combined
    assert "a.cc:20:5" in combined
    assert "TRACE" in combined
    assert "box.h:12:10" in combined

def test_print_diagnostics_empty(capsys):
    OutputFormatter.print_diagnostics([])
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""

def test_log_respects_level(capsys):
    OutputFormatter.set_level("ERROR")
    OutputFormatter.log("quiet warning", severity="warning")
    OutputFormatter.log("loud failure", severity="error")
    captured = capsys.readouterr()
    combined = f"{captured.out}{captured.err}"
    assert "quiet warning" not in combined
    assert "loud failure" in combined

def test_log_unknown_level_falls_back_to_info(capsys):
    OutputFormatter.set_level("chatty")
    OutputFormatter.log("hello", severity="info")
    assert "hello" in capsys.readouterr().err
