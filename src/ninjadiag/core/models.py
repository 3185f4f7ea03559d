from typing import Any, Dict, List, Literal, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ParserSettings(BaseSettings):
    """
    Parser tuning (the 'parser' section in ninjadiag.yaml).
    """
    model_config = SettingsConfigDict(env_prefix='NINJADIAG_', extra='ignore')

    aux_tool_prefixes: List[str] = Field(default_factory=lambda: ["ninja"])
    instantiation_marker: str = "in instantiation of"
    include_label: str = "In file included "
    original_location_label: str = "Original error location"
    normalize_paths: bool = True
    log_level: str = "INFO"

    @classmethod
    def defaults(cls) -> "ParserSettings":
        """Built-in defaults only; the environment is not consulted."""
        return cls.model_construct()


class OutputSettings(BaseModel):
    """
    Report rendering settings (the 'output' section in ninjadiag.yaml).
    """
    model_config = ConfigDict(extra='ignore')

    format: Literal["text", "json", "table"] = "text"
    show_trace: bool = True


# -----------------------------------------------------------------------------
# Classified lines
# -----------------------------------------------------------------------------

class ErrorLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    file: str
    line: int = Field(..., ge=1)
    col: int = Field(..., ge=1)
    message: str


class NoteLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["note"] = "note"
    file: str
    line: int = Field(..., ge=1)
    col: int = Field(..., ge=1)
    message: str


class IncludeLine(BaseModel):
    """An `In file included from <file>:<line>:` chain link."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["include"] = "include"
    file: str
    line: int = Field(..., ge=1)


class AuxLine(BaseModel):
    """Build tool status/summary line. Recognized, never attached."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["aux"] = "aux"
    text: str


class PlainLine(BaseModel):
    """Anything else; continuation text of the preceding message."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"
    text: str


ClassifiedLine = Union[ErrorLine, NoteLine, IncludeLine, AuxLine, PlainLine]


# -----------------------------------------------------------------------------
# Assembled output
# -----------------------------------------------------------------------------

class TraceEntry(BaseModel):
    """
    Secondary location attached to a Diagnostic: an include-chain hop, an
    attached note, or the demoted original error site.
    """
    model_config = ConfigDict(frozen=True)

    file: str
    line: int
    col: Optional[int] = None
    message: str

    @property
    def location(self) -> str:
        loc = f"{self.file}:{self.line}"
        if self.col:
            loc += f":{self.col}"
        return loc

    def to_lint_message(self) -> Dict[str, Any]:
        return {
            "type": "Trace",
            "text": self.message,
            "file": self.file,
            "line": self.line,
            "col": self.col,
        }


class Diagnostic(BaseModel):
    """
    One compiler-reported error with its most informative location.

    `message` may span several lines (continuation text joined with '\\n').
    `trace` holds include hops first, then notes in the order they were met.
    Sealed once built.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["Error"] = "Error"
    file: str
    line: int
    col: int
    message: str
    trace: Tuple[TraceEntry, ...] = ()

    @property
    def severity(self) -> str:
        return "error"

    @property
    def location(self) -> str:
        return f"{self.file}:{self.line}:{self.col}"

    def to_lint_message(self) -> Dict[str, Any]:
        """Render as a navigable item (jump target with nested trace)."""
        return {
            "type": self.kind,
            "severity": self.severity,
            "text": self.message,
            "file": self.file,
            "line": self.line,
            "col": self.col,
            "trace": [entry.to_lint_message() for entry in self.trace],
        }

    def __str__(self) -> str:
        return f"{self.location}: {self.severity}: {self.message}"
