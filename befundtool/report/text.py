"""Dictation clean-up before text reaches the matcher, composer or editor.

Pipeline stages, always applied in this order:

1. whitespace normalisation
2. spoken punctuation ("komma" -> ",", "klammer auf" -> "(", "neuer absatz" -> blank line)
3. dictionary corrections (user-maintained, applied in list order)
4. whitespace normalisation again, to tidy up after stages 2 and 3

The same entry point serves live interim previews, finalised utterances and
the bulk "normalise transcript" action, so identical input always yields
identical output.
"""

import logging
import re
from collections.abc import Callable, Sequence

from befundtool.report.types import CorrectionEntry

logger = logging.getLogger(__name__)


def as_text(value) -> str:
    """Return *value* if it is a string, otherwise an empty string."""
    return value if isinstance(value, str) else ""


# ---------------------------------------------------------------------------
# Stage 1/4: whitespace
# ---------------------------------------------------------------------------

_WHITESPACE_RULES = [
    # Any whitespace run, line breaks included -> single space
    (re.compile(r'\s+'), ' '),
    # No space before sentence punctuation
    (re.compile(r'\s([.,;:!?])'), r'\1'),
]


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs and drop spaces in front of punctuation.

    Line breaks count as whitespace, so the breaks produced by "neue zeile"
    and "neuer absatz" in stage 2 end up as single spaces after stage 4.
    """
    text = as_text(text)
    for pattern, replacement in _WHITESPACE_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


# ---------------------------------------------------------------------------
# Stage 2: spoken punctuation (German dictation)
# ---------------------------------------------------------------------------

SPOKEN_PUNCTUATION: dict[str, str] = {
    "punkt": ".",
    "komma": ",",
    "fragezeichen": "?",
    "ausrufezeichen": "!",
    "doppelpunkt": ":",
    "semikolon": ";",
    "strichpunkt": ";",
    "bindestrich": "-",
    "gedankenstrich": " - ",
    "klammer auf": "(",
    "klammer zu": ")",
    "anführungszeichen": '"',
    "neue zeile": "\n",
    "neuer absatz": "\n\n",
    "absatz": "\n\n",
}


def _spoken_pattern(phrase: str, symbol: str) -> re.Pattern:
    words = r'\s+'.join(re.escape(w) for w in phrase.split())
    body = r'\b' + words + r'\b'
    # Brackets attach to the text they enclose
    if symbol == "(":
        body += r'[^\S\n]*'
    elif symbol == ")":
        body = r'[^\S\n]*' + body
    return re.compile(body, re.IGNORECASE)


# Longest phrases first so "neuer absatz" wins over "absatz"
_SPOKEN_RULES = [
    (_spoken_pattern(phrase, symbol), symbol)
    for phrase, symbol in sorted(SPOKEN_PUNCTUATION.items(), key=lambda kv: -len(kv[0]))
]


def apply_spoken_punctuation(text: str) -> str:
    """Replace whole-word spoken punctuation names with their symbols."""
    text = as_text(text)
    for pattern, symbol in _SPOKEN_RULES:
        text = pattern.sub(lambda m, s=symbol: s, text)
    return text


# ---------------------------------------------------------------------------
# Stage 3: dictionary corrections
# ---------------------------------------------------------------------------

def _compile_correction(entry: CorrectionEntry) -> re.Pattern | None:
    wrong = as_text(entry.wrong)
    if not wrong or wrong == as_text(entry.correct):
        return None
    pattern = re.escape(wrong)
    if entry.whole_word:
        pattern = r'\b' + pattern + r'\b'
    flags = re.IGNORECASE if entry.case_insensitive else 0
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        logger.warning("Skipping correction %r (%r): %s", getattr(entry, "id", None), wrong, e)
        return None


def apply_single_correction(text: str, entry: CorrectionEntry) -> str:
    text = as_text(text)
    pattern = _compile_correction(entry)
    if pattern is None:
        return text
    correct = as_text(entry.correct)
    # Replacement is literal text, never a template with backreferences
    return pattern.sub(lambda m: correct, text)


def apply_corrections(text: str, corrections: Sequence[CorrectionEntry] | None) -> str:
    """Apply correction entries one after another, in the given order.

    Later entries see the output of earlier ones. A correction that maps onto
    its own pattern is not guarded against.
    """
    text = as_text(text)
    for entry in corrections or ():
        text = apply_single_correction(text, entry)
    return text


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

Stage = Callable[[str, Sequence[CorrectionEntry]], str]

PIPELINE: list[tuple[str, Stage]] = [
    ("whitespace", lambda text, corrections: normalize_whitespace(text)),
    ("spoken_punctuation", lambda text, corrections: apply_spoken_punctuation(text)),
    ("corrections", apply_corrections),
    ("final_whitespace", lambda text, corrections: normalize_whitespace(text)),
]


def process_transcript(text: str, corrections: Sequence[CorrectionEntry] | None = None) -> str:
    """Run the full normalisation pipeline over a piece of dictation."""
    text = as_text(text)
    corrections = list(corrections or ())
    for _name, stage in PIPELINE:
        text = stage(text, corrections)
    return text


def normalize_last_insertion(
    transcript: str,
    last_inserted: str,
    corrections: Sequence[CorrectionEntry] | None = None,
) -> tuple[str, str]:
    """Normalise only the most recently inserted utterance in *transcript*.

    Returns ``(new_transcript, normalized_insert)``. If the insertion cannot
    be found or normalising changes nothing, the transcript is returned as is.
    """
    transcript = as_text(transcript)
    last_inserted = as_text(last_inserted)
    if not last_inserted:
        return transcript, last_inserted

    normalized = process_transcript(last_inserted, corrections)
    if normalized == last_inserted:
        return transcript, last_inserted

    idx = transcript.rfind(last_inserted)
    if idx < 0:
        return transcript, last_inserted
    new_text = transcript[:idx] + normalized + transcript[idx + len(last_inserted):]
    return new_text, normalized
