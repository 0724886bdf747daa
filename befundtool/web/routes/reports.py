"""Draft report CRUD and generation."""

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from befundtool.config_store import get_config_store
from befundtool.database import SessionLocal
from befundtool.generator.service import generate_report, resolve_template_id
from befundtool.models import Report
from befundtool.store import get_template_store
from befundtool.web.routes.serialize import composed_json, report_json

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports")


class ReportBody(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    label: str | None = None
    status: Literal["draft", "final"] | None = None
    template_id: str | None = Field(None, alias="templateId")
    manual_template_override: bool | None = Field(None, alias="manualTemplateOverride")
    transcript_text: str | None = Field(None, alias="transcriptText")
    last_inserted_text: str | None = Field(None, alias="lastInsertedText")
    clinical_data: dict | None = Field(None, alias="clinicalData")


class GenerateBody(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, protected_namespaces=())

    model_mode: Literal["standard", "expert"] = Field("standard", alias="modelMode")
    study_name: str | None = Field(None, alias="studyName")


# Edits to these make a generated report stale
_CONTENT_FIELDS = ("template_id", "transcript_text", "clinical_data")


def _apply(report: Report, body: ReportBody):
    changed = body.model_dump(exclude_none=True)
    for key, value in changed.items():
        setattr(report, key, value)
    if report.final_report_html and any(k in changed for k in _CONTENT_FIELDS):
        report.is_stale = True


@router.get("/")
def list_reports(status: str = Query("", description="Filter by status")):
    with SessionLocal() as session:
        q = session.query(Report)
        if status:
            q = q.filter(Report.status == status)
        return [report_json(r) for r in q.order_by(Report.updated_at.desc()).all()]


@router.get("/{report_id}")
def get_report(report_id: int):
    with SessionLocal() as session:
        report = session.get(Report, report_id)
        if not report:
            raise HTTPException(status_code=404, detail="Report not found")
        return report_json(report)


@router.post("/", status_code=201)
def create_report(body: ReportBody):
    with SessionLocal() as session:
        report = Report()
        _apply(report, body)
        session.add(report)
        session.commit()
        logger.info("Created report %d", report.id)
        return report_json(report)


@router.patch("/{report_id}")
def update_report(report_id: int, body: ReportBody):
    with SessionLocal() as session:
        report = session.get(Report, report_id)
        if not report:
            raise HTTPException(status_code=404, detail="Report not found")
        _apply(report, body)
        session.commit()
        return report_json(report)


@router.delete("/{report_id}")
def delete_report(report_id: int):
    with SessionLocal() as session:
        report = session.get(Report, report_id)
        if not report:
            raise HTTPException(status_code=404, detail="Report not found")
        session.delete(report)
        session.commit()
    return {"status": "ok"}


@router.post("/{report_id}/generate")
def generate(report_id: int, body: GenerateBody | None = None):
    """Generate the report text for a draft using its effective template."""
    body = body or GenerateBody()
    store = get_template_store()

    with SessionLocal() as session:
        report = session.get(Report, report_id)
        if not report:
            raise HTTPException(status_code=404, detail="Report not found")

        template_id = resolve_template_id(
            store.load(),
            report.transcript_text,
            report.template_id,
            report.manual_template_override,
            auto_suggest=get_config_store().auto_suggest_enabled(),
        )
        template = store.get(template_id) if template_id else None
        if not template:
            raise HTTPException(status_code=400, detail="No template selected for this report")

        composed = generate_report(
            template,
            report.clinical_data,
            report.transcript_text,
            mode=body.model_mode,
            study_name=body.study_name,
        )

        report.template_id = template.id
        report.final_report_html = composed.html
        report.impression_text = composed.impression_text
        report.icd10 = composed.icd10
        report.did_you_know = composed.did_you_know
        report.used_fallback = composed.used_fallback
        report.is_stale = False
        session.commit()
        logger.info(
            "Generated report %d with template '%s'%s",
            report.id, template.id, " (fallback)" if composed.used_fallback else "",
        )
        return {"report": report_json(report), "composed": composed_json(composed)}
