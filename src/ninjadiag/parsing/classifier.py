import re
from typing import Callable, List, Optional

from ninjadiag.core.models import (
    AuxLine,
    ClassifiedLine,
    ErrorLine,
    IncludeLine,
    NoteLine,
    ParserSettings,
    PlainLine,
)

# Characters accepted in a reported file path.
_PATH = r"[a-zA-Z0-9_/.+-]+"
# 1-based line/column numbers, bounded so int() conversion cannot fail.
_NUM = r"[1-9]\d{0,9}"

ERROR_PATTERN = re.compile(rf"^({_PATH}):({_NUM}):({_NUM}):\s(?:fatal )?error:\s(.+)$")
NOTE_PATTERN = re.compile(rf"^({_PATH}):({_NUM}):({_NUM}):\snote:\s(.+)$")
INCLUDE_PATTERN = re.compile(rf"^In file included from ({_PATH}):({_NUM}):$")
ERRORS_GENERATED_PATTERN = re.compile(r"^\d+ errors? generated\.$")

LineParser = Callable[[str], Optional[ClassifiedLine]]


def _parse_error(match: re.Match) -> ErrorLine:
    return ErrorLine(
        file=match.group(1),
        line=int(match.group(2)),
        col=int(match.group(3)),
        message=match.group(4),
    )


def _parse_note(match: re.Match) -> NoteLine:
    return NoteLine(
        file=match.group(1),
        line=int(match.group(2)),
        col=int(match.group(3)),
        message=match.group(4),
    )


def _parse_include(match: re.Match) -> IncludeLine:
    return IncludeLine(file=match.group(1), line=int(match.group(2)))


class LineClassifier:
    """
    Classifies single lines of compiler/build-tool output.

    Arms are tried in a fixed order and the first match wins:
    error, note, include, aux, then plain as the catch-all.
    """

    def __init__(self, settings: Optional[ParserSettings] = None):
        self.settings = settings or ParserSettings.defaults()
        self._aux_patterns = [ERRORS_GENERATED_PATTERN]
        if self.settings.aux_tool_prefixes:
            prefixes = "|".join(re.escape(p) for p in self.settings.aux_tool_prefixes)
            self._aux_patterns.append(re.compile(rf"^(?:{prefixes}):.*$"))

        self._arms: List[LineParser] = [
            self._regex_arm(ERROR_PATTERN, _parse_error),
            self._regex_arm(NOTE_PATTERN, _parse_note),
            self._regex_arm(INCLUDE_PATTERN, _parse_include),
            self._match_aux,
        ]

    @staticmethod
    def _regex_arm(pattern: re.Pattern, build: Callable[[re.Match], ClassifiedLine]) -> LineParser:
        def arm(line: str) -> Optional[ClassifiedLine]:
            match = pattern.match(line)
            if match is None:
                return None
            return build(match)
        return arm

    def _match_aux(self, line: str) -> Optional[AuxLine]:
        for pattern in self._aux_patterns:
            if pattern.match(line):
                return AuxLine(text=line)
        return None

    def classify(self, line: str) -> ClassifiedLine:
        # Trailing '\r' or spaces must not defeat the anchored patterns.
        text = line.rstrip("\r\n")
        stripped = text.rstrip()
        for arm in self._arms:
            result = arm(stripped)
            if result is not None:
                return result
        return PlainLine(text=text)


def classify_line(line: str) -> ClassifiedLine:
    """Classify one line with default ParserSettings."""
    return LineClassifier(ParserSettings.defaults()).classify(line)
