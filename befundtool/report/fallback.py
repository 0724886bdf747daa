"""Local report composition used when no language model is available.

Dictated sentences are sorted into organ blocks by keyword and appended,
highlighted and verbatim, after the template's normal findings. Nothing is
invented: every highlighted span is dictated text.

Handles:
- Sentence splitting after ".", "!", "?" or a line break
- Organ classification by case-insensitive substring (first category wins)
- Sentences without an organ keyword collected into a trailing block
- Placeholder impression ("-" when nothing was dictated)
"""

import logging
import re
from collections.abc import Mapping

from befundtool.report.assembler import (
    escape_html,
    plain_to_html,
    render_report,
    sections_from_clinical_data,
)
from befundtool.report.diff import MARK_CLOSE, MARK_OPEN
from befundtool.report.text import as_text
from befundtool.report.types import ComposedReport, Template

logger = logging.getLogger(__name__)

# Closed set; order decides which category wins for a sentence
ORGAN_KEYWORDS: dict[str, list[str]] = {
    "leber": ["leber", "hepar", "hepat"],
    "gallenblase": ["gallenblase", "gallenblasen", "galle"],
    "milz": ["milz"],
    "nieren": ["niere", "nieren", "renal", "ren"],
    "pankreas": ["pankreas", "pancrea"],
    "nebennieren": ["nebenniere", "nebennieren", "adrenal"],
    "lymphknoten": ["lymphknoten", "lymph"],
    "gefaesse": ["gefäss", "gefäße", "gefass", "aorta", "vena"],
    "lunge": ["lunge", "lungen", "pulmo", "pleura"],
    "herz": ["herz", "cardiac", "perikard"],
}

UNKNOWN_STUDY = "Unbekannte Untersuchung"
NO_TEMPLATE_TEXT = "Keine Normalbefund-Vorlage definiert."
FALLBACK_IMPRESSION = "Siehe Befund. Weitere klinische Korrelation empfohlen."
BLOCK_SEPARATOR = "<br/><br/>"

_SENTENCE_BREAK = re.compile(r'(?<=[.!?\n])\s*')


def split_sentences(text: str) -> list[str]:
    """Split dictation into trimmed, non-empty sentences."""
    return [s.strip() for s in _SENTENCE_BREAK.split(as_text(text)) if s.strip()]


def classify_sentence(sentence: str) -> str | None:
    """Organ category of *sentence*, or None if no trigger matches."""
    lower = as_text(sentence).lower()
    for category, triggers in ORGAN_KEYWORDS.items():
        if any(t in lower for t in triggers):
            return category
    return None


def group_sentences(transcript: str) -> tuple[dict[str, list[str]], list[str]]:
    """Sentences per category (in order of first appearance) plus the unmatched ones."""
    by_category: dict[str, list[str]] = {}
    unmatched: list[str] = []
    for sentence in split_sentences(transcript):
        category = classify_sentence(sentence)
        if category is None:
            unmatched.append(sentence)
        else:
            by_category.setdefault(category, []).append(sentence)
    return by_category, unmatched


def _highlight_block(sentences: list[str]) -> str:
    return " ".join(f"{MARK_OPEN}{escape_html(s)}{MARK_CLOSE}" for s in sentences)


def compose_befund(normal_befund_text: str, transcript: str) -> str:
    """Befund HTML: template body followed by the highlighted dictation blocks."""
    body = as_text(normal_befund_text)
    by_category, unmatched = group_sentences(transcript)

    blocks = [_highlight_block(sentences) for sentences in by_category.values()]
    if unmatched:
        blocks.append(_highlight_block(unmatched))

    if not body.strip():
        return BLOCK_SEPARATOR.join(blocks) if blocks else escape_html(NO_TEMPLATE_TEXT)

    befund = plain_to_html(body)
    if blocks:
        befund += BLOCK_SEPARATOR + BLOCK_SEPARATOR.join(blocks)
    return befund


def compose_fallback_report(
    transcript: str,
    template: Template | None,
    clinical_data: Mapping | None = None,
    study_name: str | None = None,
) -> ComposedReport:
    """Build a complete report without any external generation service.

    Total over its inputs: empty or malformed values degrade to placeholders.
    """
    transcript = as_text(transcript)
    name = as_text(study_name).strip() or (as_text(template.name).strip() if template else "")
    sections = sections_from_clinical_data(name or UNKNOWN_STUDY, clinical_data)

    normal_text = as_text(template.normal_befund_text) if template else ""
    sections.befund = compose_befund(normal_text, transcript)

    dictated = bool(transcript.strip())
    impression_text = FALLBACK_IMPRESSION if dictated else "-"
    sections.impression = f"{MARK_OPEN}{FALLBACK_IMPRESSION}{MARK_CLOSE}" if dictated else "-"

    logger.debug("Composed fallback report for %r (%d chars dictated)", sections.untersuchung, len(transcript))
    return ComposedReport(
        html=render_report(sections),
        sections=sections,
        impression_text=impression_text,
        used_fallback=True,
    )
