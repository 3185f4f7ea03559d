from ninjadiag.core.models import (
    AuxLine,
    ClassifiedLine,
    Diagnostic,
    ErrorLine,
    IncludeLine,
    NoteLine,
    ParserSettings,
    PlainLine,
    TraceEntry,
)
from ninjadiag.core.paths import normalize_path
from ninjadiag.parsing import (
    DiagnosticAssembler,
    LineClassifier,
    LineCursor,
    classify_line,
    parse_build_output,
)

__all__ = [
    "AuxLine",
    "ClassifiedLine",
    "Diagnostic",
    "DiagnosticAssembler",
    "ErrorLine",
    "IncludeLine",
    "LineClassifier",
    "LineCursor",
    "NoteLine",
    "ParserSettings",
    "PlainLine",
    "TraceEntry",
    "classify_line",
    "normalize_path",
    "parse_build_output",
]
