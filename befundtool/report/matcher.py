"""Rank report templates by keyword overlap with the dictated text."""

from collections.abc import Sequence

from befundtool.report.text import as_text
from befundtool.report.types import Confidence, Template, TemplateScore


def score_template(template: Template, transcript: str) -> int:
    """Count the template keywords that occur anywhere in *transcript*.

    Case-insensitive substring test; each keyword counts at most once no
    matter how often it occurs. Blank keywords never match.
    """
    lower = as_text(transcript).lower()
    if not lower:
        return 0
    seen = set()
    score = 0
    for keyword in template.keywords or ():
        kw = as_text(keyword).strip().lower()
        if not kw or kw in seen:
            continue
        seen.add(kw)
        if kw in lower:
            score += 1
    return score


def confidence_for(score: int) -> Confidence:
    if score >= 3:
        return "high"
    if score == 2:
        return "medium"
    return "low"


def rank_templates(templates: Sequence[Template], transcript: str) -> list[TemplateScore]:
    """Score every template, drop zero scores, best first.

    Equal scores keep the order of *templates*.
    """
    scores = []
    for template in templates or ():
        score = score_template(template, transcript)
        if score > 0:
            scores.append(TemplateScore(template, score, confidence_for(score)))
    return sorted(scores, key=lambda s: s.score, reverse=True)


def suggest_template(templates: Sequence[Template], transcript: str) -> Template | None:
    """Top-ranked template for *transcript*, or None when nothing matches."""
    ranked = rank_templates(templates, transcript)
    return ranked[0].template if ranked else None
