"""Render extraction results as markdown or a one-line summary."""

from __future__ import annotations

from src.extraction.models import ExternalAction, ExtractionResult

# (category, heading, bullet prefix)
_SECTIONS: list[tuple[str, str, str]] = [
    ("dates", "Dates/Deadlines", "- "),
    ("people", "People", "- "),
    ("questions", "Questions", "- "),
    ("decisions", "Decisions", "- "),
    ("ideas", "Ideas", "- "),
    ("blockers", "Blockers", "- ⚠️ "),
]


def _format_action(action: str | ExternalAction) -> str:
    if isinstance(action, ExternalAction):
        return f"- [ ] {action.text} (priority: {action.priority}, via {action.source})"
    return f"- [ ] {action}"


def format_as_markdown(result: ExtractionResult) -> str:
    """Format an extraction result as a markdown document.

    Empty categories are omitted; the original text is always appended.
    """
    lines: list[str] = [f"# Brain Dump - {result.processed_at.date().isoformat()}", ""]

    if result.actions:
        lines.append("## Action Items")
        lines.extend(_format_action(a) for a in result.actions)
        lines.append("")

    for name, heading, prefix in _SECTIONS:
        items = result.category(name)
        if not items:
            continue
        lines.append(f"## {heading}")
        lines.extend(f"{prefix}{item}" for item in items)
        lines.append("")

    lines.append("## Original")
    lines.append("```")
    lines.append(result.raw)
    lines.append("```")

    return "\n".join(lines)


def summarize(result: ExtractionResult) -> str:
    """Return a short human-readable count of what was found."""
    parts: list[str] = []

    if result.actions:
        parts.append(f"{len(result.actions)} action(s)")
    if result.people:
        parts.append(f"{len(result.people)} people")
    if result.dates:
        parts.append(f"{len(result.dates)} date(s)")
    if result.blockers:
        parts.append(f"{len(result.blockers)} blocker(s)")

    return f"Found: {', '.join(parts)}" if parts else "No structured items found"
