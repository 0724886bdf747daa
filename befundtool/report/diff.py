"""Token-level highlighting of what a revision added to a template baseline.

Only the revised text is shown: tokens the revision shares with the baseline
come out plain, tokens it added are flagged, and tokens it removed from the
baseline are dropped.
"""

import html
import re

from befundtool.report.text import as_text
from befundtool.report.types import DiffSegment

HIGHLIGHT_CLASS = "hl"
MARK_OPEN = f'<mark class="{HIGHLIGHT_CLASS}">'
MARK_CLOSE = "</mark>"

# Whitespace runs and sentence punctuation are tokens of their own
_TOKEN_SPLIT = re.compile(r'(\s+|[.,;:!?])')


def tokenize(text: str) -> list[str]:
    return [t for t in _TOKEN_SPLIT.split(as_text(text)) if t]


def _lcs_table(a: list[str], b: list[str]) -> list[list[int]]:
    m, n = len(a), len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row, prev = dp[i], dp[i - 1]
        ai = a[i - 1]
        for j in range(1, n + 1):
            if ai == b[j - 1]:
                row[j] = prev[j - 1] + 1
            else:
                row[j] = max(prev[j], row[j - 1])
    return dp


def _align(baseline: list[str], revised: list[str]) -> list[tuple[str, str]]:
    """Backtrack the LCS table into (kind, token) pairs in forward order.

    kind is one of "common", "added", "removed".
    """
    dp = _lcs_table(baseline, revised)
    i, j = len(baseline), len(revised)
    ops = []
    while i > 0 or j > 0:
        if i > 0 and j > 0 and baseline[i - 1] == revised[j - 1]:
            ops.append(("common", revised[j - 1]))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or dp[i][j - 1] >= dp[i - 1][j]):
            ops.append(("added", revised[j - 1]))
            j -= 1
        else:
            ops.append(("removed", baseline[i - 1]))
            i -= 1
    ops.reverse()
    return ops


def compute_diff(baseline_text: str, revised_text: str) -> list[DiffSegment]:
    """Split *revised_text* into plain and highlighted runs.

    Adjacent runs always alternate in ``is_highlight`` and are never empty.
    With an empty baseline or revision the revised text comes back as one
    plain segment (or no segment at all if it is empty).
    """
    baseline_text = as_text(baseline_text)
    revised_text = as_text(revised_text)
    if not baseline_text or not revised_text:
        return [DiffSegment(revised_text, False)] if revised_text else []

    segments: list[DiffSegment] = []
    current: list[str] = []
    current_highlight = False

    for kind, token in _align(tokenize(baseline_text), tokenize(revised_text)):
        if kind == "removed":
            continue
        highlight = kind == "added"
        if current and highlight != current_highlight:
            segments.append(DiffSegment("".join(current), current_highlight))
            current = []
        current.append(token)
        current_highlight = highlight

    if current:
        segments.append(DiffSegment("".join(current), current_highlight))
    return segments


def segments_to_html(segments: list[DiffSegment]) -> str:
    """Render segments as escaped HTML with highlight marks and ``<br/>`` breaks."""
    parts = []
    for seg in segments:
        text = html.escape(seg.text, quote=True).replace("\n", "<br/>")
        parts.append(f"{MARK_OPEN}{text}{MARK_CLOSE}" if seg.is_highlight else text)
    return "".join(parts)


def highlight_differences(baseline_text: str, revised_text: str) -> str:
    return segments_to_html(compute_diff(baseline_text, revised_text))
