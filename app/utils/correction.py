"""
Helpers for applying spell-check suggestions to the checked text.

Backends only report the flagged token, not its position, so corrections are
located by substring search over the original text.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class CorrectionSpan:
    """A located replacement of `token` by `suggestion` at text[start:end]."""

    start: int
    end: int
    token: str
    suggestion: str
    issue_index: int

    def overlaps(self, start: int, end: int) -> bool:
        return start < self.end and self.start < end


def top_suggestion(suggestions: Sequence[str]) -> Optional[str]:
    """Return the highest ranked non-empty suggestion, if any."""
    for suggestion in suggestions:
        if suggestion:
            return suggestion
    return None


def find_correction_spans(text: str, corrections: Sequence[Tuple[str, Optional[str]]]) -> List[CorrectionSpan]:
    """
    Locate every occurrence of each flagged token in text.

    Issues are processed in order; an occurrence overlapping a span claimed
    by an earlier issue is skipped. Entries without a token or suggestion are
    ignored.

    Args:
        text: The checked text
        corrections: (token, suggestion) pairs in issue order

    Returns:
        Non-overlapping spans sorted by start position
    """
    spans: List[CorrectionSpan] = []

    for index, (token, suggestion) in enumerate(corrections):
        if not token or not suggestion:
            continue

        position = text.find(token)
        while position != -1:
            end = position + len(token)
            if not any(span.overlaps(position, end) for span in spans):
                spans.append(CorrectionSpan(position, end, token, suggestion, index))
            position = text.find(token, end)

    return sorted(spans, key=lambda span: span.start)


def render_corrected_text(text: str, spans: Sequence[CorrectionSpan]) -> str:
    """Build the corrected text by substituting each span with its suggestion."""
    parts = []
    cursor = 0
    for span in spans:
        parts.append(text[cursor:span.start])
        parts.append(span.suggestion)
        cursor = span.end
    parts.append(text[cursor:])
    return "".join(parts)


def replace_all(text: str, token: str, replacement: str) -> Tuple[str, int]:
    """
    Replace every occurrence of token with replacement.

    Returns:
        (updated text, number of replacements); text is unchanged when token is empty
    """
    if not token:
        return text, 0
    count = text.count(token)
    return text.replace(token, replacement), count
