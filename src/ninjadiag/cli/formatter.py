import json
from typing import Any, Dict, List
from rich.console import Console
from rich.table import Table
from rich.markup import escape
from ninjadiag.core.models import ClassifiedLine, Diagnostic

# Create a stderr console for logging
error_console = Console(stderr=True)

SEVERITY_LEVELS = {
    "debug": 10,
    "info": 20,
    "success": 20,
    "warning": 30,
    "error": 40,
    "critical": 50,
}

class OutputFormatter:
    """
    Handles output formatting for the CLI.
    Ensures separation of concerns between System Logs (stderr) and Data (stdout).
    """

    # Messages below this level are dropped (see ParserSettings.log_level).
    level: int = SEVERITY_LEVELS["info"]

    @classmethod
    def set_level(cls, level_name: str) -> None:
        cls.level = SEVERITY_LEVELS.get(level_name.lower(), SEVERITY_LEVELS["info"])

    @staticmethod
    def log(message: str, severity: str = "info") -> None:
        """
        Print system messages to stderr with color coding.
        """
        if SEVERITY_LEVELS.get(severity, SEVERITY_LEVELS["info"]) < OutputFormatter.level:
            return

        style = "white"
        prefix = "[SYSTEM]"

        if severity == "warning":
            style = "yellow"
        elif severity == "error":
            style = "red"
        elif severity == "critical":
            style = "bold red"
        elif severity == "success":
            style = "green"

        error_console.print(f"[{style}]{escape(prefix)} {escape(message)}[/{style}]")

    @staticmethod
    def print_diagnostics(diagnostics: List[Diagnostic], show_trace: bool = True) -> None:
        """
        Prints the diagnostics table; trace entries follow their error as dim rows.
        """
        if not diagnostics:
            return

        table = Table(title="Build Diagnostics", border_style="red", header_style="bold red")
        table.add_column("Severity", style="bold")
        table.add_column("Location")
        table.add_column("Message")

        for diag in diagnostics:
            table.add_row(
                f"[red]{diag.severity.upper()}[/red]",
                escape(diag.location),
                escape(diag.message),
            )
            if not show_trace:
                continue
            for entry in diag.trace:
                table.add_row(
                    "[dim]TRACE[/dim]",
                    f"[dim]  {escape(entry.location)}[/dim]",
                    f"[dim]{escape(entry.message)}[/dim]",
                )

        error_console.print(table)
        error_console.print() # spacing


def render_text(diagnostics: List[Diagnostic], show_trace: bool = True) -> str:
    """Compiler-style plain text report, one block per diagnostic."""
    lines: List[str] = []
    for diag in diagnostics:
        lines.append(str(diag))
        if show_trace:
            for entry in diag.trace:
                first, *rest = entry.message.split("\n")
                lines.append(f"    {entry.location}: {first}")
                lines.extend(f"    {extra}" for extra in rest)
    lines.append(f"{len(diagnostics)} error(s) found.")
    return "\n".join(lines)


def render_json(diagnostics: List[Diagnostic]) -> str:
    payload: Dict[str, Any] = {
        "summary": {
            "errors": sum(1 for diag in diagnostics if diag.severity == "error"),
            "total": len(diagnostics),
        },
        "diagnostics": [diag.to_lint_message() for diag in diagnostics],
    }
    return json.dumps(payload, indent=2)


def render_classified(classified: List[ClassifiedLine]) -> str:
    """Debug view: one `<n> <kind> <fields>` row per input line."""
    rows = []
    for number, item in enumerate(classified, start=1):
        fields = item.model_dump(exclude={"kind"})
        rows.append(f"{number:>5} {item.kind:<8} {json.dumps(fields)}")
    return "\n".join(rows)
