from ninjadiag.parsing.assembler import DiagnosticAssembler, parse_build_output
from ninjadiag.parsing.classifier import LineClassifier, classify_line
from ninjadiag.parsing.cursor import LineCursor

__all__ = [
    "DiagnosticAssembler",
    "LineClassifier",
    "LineCursor",
    "classify_line",
    "parse_build_output",
]
