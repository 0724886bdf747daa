"""German radiology keyterms for Deepgram keyword boosting."""

from collections.abc import Iterable

from befundtool.report.types import CorrectionEntry, Template

MAX_KEYTERMS = 100

# Always included regardless of template
BASE_TERMS = [
    "Befund", "Beurteilung", "Normalbefund", "Voruntersuchung", "Kontrastmittel",
    "unauffällig", "regelrecht", "altersentsprechend", "keine Raumforderung",
    "kein Nachweis", "Verdacht auf", "Zustand nach", "Status nach",
    "Läsion", "Zyste", "Raumforderung", "Erguss", "Infiltrat", "Konsolidation",
    "Stenose", "Aneurysma", "Verkalkung", "Lymphadenopathie",
    "hypodens", "hyperdens", "isodens", "hypointens", "hyperintens",
    "Diffusionsrestriktion", "Kontrastmittelaufnahme",
    "links", "rechts", "beidseits", "ventral", "dorsal", "kranial", "kaudal",
    "Leber", "Gallenblase", "Milz", "Pankreas", "Nieren", "Nebennieren",
]


def get_keyterms(
    templates: Iterable[Template] = (),
    corrections: Iterable[CorrectionEntry] = (),
    hints: Iterable[str] = (),
) -> list[str]:
    """Build a keyterm list from the template library and correction targets, capped at 100."""
    terms = list(BASE_TERMS)

    # Caller-supplied hints go first so they survive the cap
    terms[:0] = [h for h in hints if isinstance(h, str)]

    for c in corrections:
        if len(c.correct) > 1:
            terms.append(c.correct)
    for t in templates:
        terms.extend(t.keywords)

    # Deduplicate while preserving order, cap at 100
    seen = set()
    unique = []
    for t in terms:
        key = t.lower().strip()
        if key and key not in seen:
            seen.add(key)
            unique.append(t.strip())
    return unique[:MAX_KEYTERMS]
