"""Assemble report sections into the HTML document handed to the editor."""

import html
import re
from collections.abc import Mapping

from befundtool.report.diff import MARK_CLOSE, MARK_OPEN, highlight_differences
from befundtool.report.text import as_text
from befundtool.report.types import ReportSections, Template

PLACEHOLDER = "-"

# (attribute, heading) in display order
SECTION_HEADINGS = [
    ("untersuchung", "UNTERSUCHUNG"),
    ("klinische_angaben", "KLINISCHE ANGABEN"),
    ("technik", "TECHNIK"),
    ("kontrastmittel", "KONTRASTMITTEL"),
    ("voruntersuchungen", "VORUNTERSUCHUNGEN"),
]

# Clinical data keys, first non-empty wins
CLINICAL_FIELDS = {
    "klinische_angaben": ("klinischeAngaben", "indication", "klinische_angaben"),
    "technik": ("technik",),
    "kontrastmittel": ("kontrastmittel",),
    "voruntersuchungen": ("voruntersuchungen",),
}


def escape_html(text: str) -> str:
    return html.escape(as_text(text), quote=True)


def clinical_value(clinical_data: Mapping | None, *keys: str) -> str:
    if not isinstance(clinical_data, Mapping):
        return ""
    for key in keys:
        value = as_text(clinical_data.get(key)).strip()
        if value:
            return value
    return ""


def sections_from_clinical_data(study_name: str, clinical_data: Mapping | None) -> ReportSections:
    """Administrative fields of a report, straight from the clinical data map."""
    sections = ReportSections(untersuchung=as_text(study_name).strip())
    for attr, keys in CLINICAL_FIELDS.items():
        setattr(sections, attr, clinical_value(clinical_data, *keys))
    return sections


# ---------------------------------------------------------------------------
# Rich text (befund / beurteilung)
# ---------------------------------------------------------------------------

_ALLOWED_TAG = re.compile(
    r'&lt;br\s*/?&gt;|&lt;mark class=&quot;hl&quot;&gt;|&lt;/mark&gt;',
    re.IGNORECASE,
)
_MARKUP_TAG = re.compile(r'<br\s*/?>|</?mark\b[^>]*>', re.IGNORECASE)


def sanitize_rich_text(text: str) -> str:
    """Escape *text*, letting only line breaks and highlight marks through.

    Newlines become ``<br/>``. Unbalanced marks are repaired: a stray closing
    tag is dropped, a mark left open is closed at the end.
    """
    escaped = escape_html(text)
    out = []
    depth = 0
    pos = 0
    for m in _ALLOWED_TAG.finditer(escaped):
        out.append(escaped[pos:m.start()])
        tag = m.group(0).lower()
        if tag.startswith("&lt;br"):
            out.append("<br/>")
        elif tag == "&lt;/mark&gt;":
            if depth:
                out.append(MARK_CLOSE)
                depth -= 1
        else:
            out.append(MARK_OPEN)
            depth += 1
        pos = m.end()
    out.append(escaped[pos:])
    out.append(MARK_CLOSE * depth)
    return "".join(out).replace("\n", "<br/>")


def strip_markup(text: str) -> str:
    """Turn ``<br>`` into newlines and drop highlight marks from model text."""
    def _sub(m):
        return "\n" if m.group(0).lower().startswith("<br") else ""
    return _MARKUP_TAG.sub(_sub, as_text(text))


def plain_to_html(text: str) -> str:
    return escape_html(text).replace("\n", "<br/>")


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_report(sections: ReportSections) -> str:
    """Render sections as the report HTML.

    Administrative fields are escaped here; ``befund`` and ``impression``
    must already be sanitised fragments.
    """
    lines = ['<div class="report-content">']
    for attr, heading in SECTION_HEADINGS:
        value = escape_html(getattr(sections, attr)) or PLACEHOLDER
        lines.append(f"  <p><strong>{heading}:</strong><br/>{value}</p>")
    lines.append("  <p><strong>BEFUND:</strong></p>")
    lines.append(f'  <div class="befund-content">{sections.befund or PLACEHOLDER}</div>')
    lines.append("  <p><strong>BEURTEILUNG:</strong></p>")
    lines.append(f'  <div class="impression-content">{sections.impression or PLACEHOLDER}</div>')
    lines.append("</div>")
    return "\n".join(lines)


def assemble_revised_report(
    template: Template,
    clinical_data: Mapping | None,
    revised_befund: str,
    beurteilung: str,
    study_name: str | None = None,
) -> tuple[str, ReportSections]:
    """Build the report for a model-revised befund.

    The revision is diffed against the template baseline so that everything
    the model added is highlighted.
    """
    sections = sections_from_clinical_data(study_name or template.name, clinical_data)
    sections.befund = highlight_differences(
        as_text(template.normal_befund_text),
        strip_markup(revised_befund),
    )
    sections.impression = sanitize_rich_text(beurteilung)
    return render_report(sections), sections


# ---------------------------------------------------------------------------
# Copy-out
# ---------------------------------------------------------------------------

def strip_html_for_copy(report_html: str) -> str:
    """Plain text version of a rendered report for the clipboard."""
    text = as_text(report_html)
    if not text:
        return ""
    text = re.sub(r'<br\s*/?>', '\n', text, flags=re.IGNORECASE)
    text = re.sub(r'</(?:p|div)>', '\n', text, flags=re.IGNORECASE)
    text = re.sub(r'<[^>]+>', '', text)
    text = html.unescape(text)
    text = re.sub(r'[ \t]+\n', '\n', text)
    text = re.sub(r'\n[ \t]+', '\n', text)
    text = re.sub(r'\n{3,}', '\n\n', text)
    return text.strip()


def copy_text(report_html: str, icd10: str | None = None) -> str:
    text = strip_html_for_copy(report_html)
    code = as_text(icd10).strip()
    if code:
        text += f"\n\nICD-10-Codierung: {code}"
    return text
