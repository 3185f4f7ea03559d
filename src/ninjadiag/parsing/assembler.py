from typing import List, Optional, Sequence

from ninjadiag.core.models import (
    Diagnostic,
    ErrorLine,
    IncludeLine,
    NoteLine,
    ParserSettings,
    PlainLine,
    TraceEntry,
)
from ninjadiag.core.paths import normalize_path
from ninjadiag.parsing.classifier import LineClassifier
from ninjadiag.parsing.cursor import LineCursor

DIAGNOSTIC_START_KINDS = ("error", "include")


class DiagnosticAssembler:
    """
    Turns classified compiler output into Diagnostic records.

    Single forward pass:
      1. skip to the next error or include line
      2. collect consecutive include lines as a pending trace prefix
      3. drop the prefix unless an error line follows it
      4. open a Diagnostic from the error line, absorbing plain continuation lines
      5. attach consecutive notes (each with its own continuation lines)

    A note whose message starts with the instantiation marker re-points the
    Diagnostic at the instantiation site. This happens once per Diagnostic;
    later instantiation notes only extend the message.

    All state lives in the cursor of one `assemble` call.
    """

    def __init__(self, settings: Optional[ParserSettings] = None):
        self.settings = settings or ParserSettings.defaults()
        self.classifier = LineClassifier(self.settings)

    def assemble(self, lines: Sequence[str]) -> List[Diagnostic]:
        cursor = LineCursor(lines, self.classifier.classify)
        diagnostics: List[Diagnostic] = []
        while cursor.skip_until(DIAGNOSTIC_START_KINDS):
            diagnostic = self._parse_diagnostic(cursor)
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        return diagnostics

    def _normalize(self, path: str) -> str:
        if self.settings.normalize_paths:
            return normalize_path(path)
        return path

    def _parse_diagnostic(self, cursor: LineCursor) -> Optional[Diagnostic]:
        includes: List[IncludeLine] = []
        while isinstance(cursor.current, IncludeLine):
            includes.append(cursor.current)
            cursor.advance()

        error = cursor.current
        if not isinstance(error, ErrorLine):
            return None

        file = self._normalize(error.file)
        line = error.line
        col = error.col
        trace: List[TraceEntry] = [
            TraceEntry(
                file=self._normalize(include.file),
                line=include.line,
                message=self.settings.include_label,
            )
            for include in includes
        ]
        cursor.advance()
        message = self._read_continuation(cursor, error.message)

        promoted = False
        while True:
            note = self._parse_note(cursor)
            if note is None:
                break

            if not note.message.startswith(self.settings.instantiation_marker):
                trace.append(note)
                continue

            if not promoted:
                # The error points into the template definition; the note
                # points at the instantiation, which is where to jump.
                trace.append(TraceEntry(
                    file=file,
                    line=line,
                    col=col,
                    message=self.settings.original_location_label,
                ))
                file, line, col = note.file, note.line, note.col
                promoted = True
            message += "\n" + note.message

        return Diagnostic(file=file, line=line, col=col, message=message, trace=tuple(trace))

    def _parse_note(self, cursor: LineCursor) -> Optional[TraceEntry]:
        note = cursor.current
        if not isinstance(note, NoteLine):
            return None

        cursor.advance()
        return TraceEntry(
            file=self._normalize(note.file),
            line=note.line,
            col=note.col,
            message=self._read_continuation(cursor, note.message),
        )

    @staticmethod
    def _read_continuation(cursor: LineCursor, message: str) -> str:
        while isinstance(cursor.current, PlainLine):
            message += "\n" + cursor.current.text
            cursor.advance()
        return message


def parse_build_output(output: str, settings: Optional[ParserSettings] = None) -> List[Diagnostic]:
    """
    Parse the full captured stdout/stderr of a build into Diagnostics.

    Never raises on arbitrary text; unrecognized input yields fewer records.
    """
    lines = output.split("\n")
    # A terminating newline does not start one more (empty) continuation line.
    if lines and lines[-1] == "":
        lines.pop()
    return DiagnosticAssembler(settings).assemble(lines)
