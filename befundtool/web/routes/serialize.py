"""JSON shapes shared by the route modules."""

from dataclasses import asdict

from befundtool.models import Report
from befundtool.report.types import ComposedReport, CorrectionEntry, Template, TemplateScore


def template_json(t: Template) -> dict:
    return {
        "id": t.id,
        "name": t.name,
        "keywords": list(t.keywords),
        "normalBefundText": t.normal_befund_text,
        "updatedAt": t.updated_at,
    }


def correction_json(c: CorrectionEntry) -> dict:
    return {
        "id": c.id,
        "wrong": c.wrong,
        "correct": c.correct,
        "caseInsensitive": c.case_insensitive,
        "wholeWord": c.whole_word,
    }


def score_json(s: TemplateScore) -> dict:
    return {
        "template": template_json(s.template),
        "score": s.score,
        "confidence": s.confidence,
    }


def composed_json(r: ComposedReport) -> dict:
    return {
        "html": r.html,
        "sections": asdict(r.sections),
        "impressionText": r.impression_text,
        "usedFallback": r.used_fallback,
        "didYouKnow": r.did_you_know,
        "icd10": r.icd10,
        "error": r.error,
    }


def report_json(r: Report) -> dict:
    return {
        "id": r.id,
        "status": r.status,
        "label": r.label,
        "templateId": r.template_id,
        "manualTemplateOverride": r.manual_template_override,
        "transcriptText": r.transcript_text,
        "lastInsertedText": r.last_inserted_text,
        "clinicalData": r.clinical_data or {},
        "finalReportHtml": r.final_report_html,
        "impressionText": r.impression_text,
        "icd10": r.icd10,
        "didYouKnow": r.did_you_know,
        "usedFallback": r.used_fallback,
        "isStale": r.is_stale,
        "createdAt": r.created_at.isoformat() if r.created_at else None,
        "updatedAt": r.updated_at.isoformat() if r.updated_at else None,
    }
