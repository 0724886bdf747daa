"""Plain data records shared by the report drafting core."""

from dataclasses import dataclass
from typing import Literal

Confidence = Literal["high", "medium", "low"]


@dataclass(frozen=True)
class Template:
    """A reusable baseline report skeleton keyed by study type."""
    id: str
    name: str
    keywords: tuple[str, ...] = ()
    normal_befund_text: str = ""
    updated_at: int = 0


@dataclass(frozen=True)
class CorrectionEntry:
    id: str
    wrong: str
    correct: str
    case_insensitive: bool = True
    whole_word: bool = True


@dataclass(frozen=True)
class DiffSegment:
    text: str
    is_highlight: bool


@dataclass(frozen=True)
class TemplateScore:
    template: Template
    score: int
    confidence: Confidence


@dataclass
class ReportSections:
    """Rendered report sections.

    The administrative fields are plain text; ``befund`` and ``impression``
    are HTML fragments restricted to ``<br/>`` and highlight marks.
    """
    untersuchung: str = ""
    klinische_angaben: str = ""
    technik: str = ""
    kontrastmittel: str = ""
    voruntersuchungen: str = ""
    befund: str = ""
    impression: str = ""


@dataclass
class ComposedReport:
    html: str
    sections: ReportSections
    impression_text: str = ""
    used_fallback: bool = False
    did_you_know: dict[str, str] | None = None
    icd10: str | None = None
    error: dict[str, str] | None = None
