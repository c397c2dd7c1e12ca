"""Pure rendering helpers for the review page."""

import re
from collections.abc import Mapping
from typing import Any

from scholarsight.models.schemas import Decision, PaperScores

SCORE_LABELS: tuple[tuple[str, str], ...] = (
    ("novelty", "Novelty"),
    ("methodology", "Methodology"),
    ("clarity", "Clarity"),
    ("significance", "Significance"),
    ("citations", "Citations"),
)

DECISION_BADGE_CLASSES: dict[Decision, str] = {
    Decision.ACCEPT: "bg-green-100 text-green-800 border-green-200",
    Decision.MINOR_REVISION: "bg-blue-100 text-blue-800 border-blue-200",
    Decision.MAJOR_REVISION: "bg-amber-100 text-amber-800 border-amber-200",
    Decision.REJECT: "bg-red-100 text-red-800 border-red-200",
}


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists.
    """
    # Escape HTML entities first
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-slate-800 text-slate-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
        text,
    )
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-slate-200 text-indigo-700 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)
    text = re.sub(r"\*([^*]+)\*", r"<em>\1</em>", text)
    text = re.sub(r"(?<!\w)_([^_]+)_(?!\w)", r"<em>\1</em>", text)

    text = re.sub(
        r"\[([^\]]+)\]\(([^)]+)\)",
        r'<a href="\2" class="text-indigo-600 underline" target="_blank">\1</a>',
        text,
    )

    text = _wrap_list_items(text, r"^[-*]\s+", '<ul class="list-disc list-inside my-2 space-y-1">', "</ul>")
    text = _wrap_list_items(text, r"^\d+\.\s+", '<ol class="list-decimal list-inside my-2 space-y-1">', "</ol>")

    return text.replace("\n", "<br>")


def _wrap_list_items(text: str, marker: str, open_tag: str, close_tag: str) -> str:
    lines = text.split("\n")
    in_list = False
    result = []
    for line in lines:
        stripped = line.strip()
        if re.match(marker, stripped):
            if not in_list:
                result.append(open_tag)
                in_list = True
            result.append(f"<li>{re.sub(marker, '', stripped)}</li>")
        else:
            if in_list:
                result.append(close_tag)
                in_list = False
            result.append(line)
    if in_list:
        result.append(close_tag)
    return "\n".join(result)


def score_rows(scores: PaperScores | Mapping[str, Any]) -> list[tuple[str, float]]:
    """Return the five (label, score) rows for the score chart.

    A key missing from a mapping renders as 0. Present values are kept as is.
    """
    values = scores.model_dump() if isinstance(scores, PaperScores) else scores
    return [(label, values.get(key, 0)) for key, label in SCORE_LABELS]


def author_line(authors: list[str]) -> str | None:
    """Comma-joined author names, or None when there is nothing to show."""
    names = [name.strip() for name in authors if name and name.strip()]
    return ", ".join(names) if names else None


def decision_badge_classes(decision: Decision | str) -> str:
    """Tailwind classes for a decision badge; unknown values use Major Revision."""
    try:
        decision = Decision(decision)
    except ValueError:
        return DECISION_BADGE_CLASSES[Decision.MAJOR_REVISION]
    return DECISION_BADGE_CLASSES[decision]


def is_plain_enter(args: Mapping[str, Any] | None) -> bool:
    """True for Enter without Shift, Ctrl, Alt or Meta held.

    Modified Enter inserts a newline in the chat input instead of sending.
    """
    if not args:
        return True
    return not any(args.get(key) for key in ("shiftKey", "ctrlKey", "altKey", "metaKey"))
