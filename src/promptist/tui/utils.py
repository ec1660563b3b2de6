"""TUI utility functions for Promptist."""

from datetime import UTC, datetime

from rich.text import Text

from promptist.templating import VariableKind, extract_variables

# Styles for variable tokens in previews and the editor hint
VARIABLE_STYLES: dict[VariableKind, str] = {
    VariableKind.SELECTION: "bold cyan",
    VariableKind.CLIPBOARD: "bold magenta",
    VariableKind.DATE: "bold green",
    VariableKind.TIME: "bold green",
    VariableKind.DATETIME: "bold green",
    VariableKind.INPUT: "bold yellow",
    VariableKind.UNKNOWN: "dim",
}


def format_relative_time(dt: datetime) -> str:
    """Format datetime as relative time string.

    Args:
        dt: The datetime to format (naive datetimes are assumed to be local)

    Returns:
        Relative time string like "5m ago", "2h ago", "3d ago"
    """
    if dt.tzinfo is None:
        dt = dt.astimezone()
    total_seconds = (datetime.now(UTC) - dt).total_seconds()

    thresholds = [
        (365 * 24 * 3600, "y ago"),
        (30 * 24 * 3600, "mo ago"),
        (24 * 3600, "d ago"),
        (3600, "h ago"),
        (60, "m ago"),
    ]

    for threshold, suffix in thresholds:
        if total_seconds >= threshold:
            return f"{int(total_seconds // threshold)}{suffix}"
    return "just now"


def highlight_variables(content: str) -> Text:
    """Render template content with ``{{variables}}`` styled by kind."""
    text = Text(content)
    for variable in extract_variables(content):
        text.stylize(VARIABLE_STYLES[variable.kind], variable.start, variable.end)
    return text


def truncate(text: str, limit: int) -> str:
    """Single-line text cut to ``limit`` characters with an ellipsis."""
    single_line = " ".join(text.split())
    if len(single_line) <= limit:
        return single_line
    return single_line[: limit - 1] + "…"
