"""JSON API endpoints for the drafting workflow."""

import logging
from typing import Literal

from fastapi import APIRouter, File, HTTPException, UploadFile
from pydantic import BaseModel, ConfigDict, Field

from befundtool.config import settings
from befundtool.generator.openai_client import model_for_mode
from befundtool.generator.service import generate_report
from befundtool.report.assembler import copy_text
from befundtool.report.fallback import compose_fallback_report
from befundtool.report.matcher import rank_templates
from befundtool.report.text import normalize_last_insertion, process_transcript
from befundtool.report.types import Template
from befundtool.store import get_correction_store, get_template_store
from befundtool.transcriber.deepgram_client import TranscriptionError, transcribe_buffer
from befundtool.transcriber.keyterms import get_keyterms
from befundtool.web.routes.serialize import composed_json, score_json

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


class _Body(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, protected_namespaces=())


class NormalizeRequest(_Body):
    text: str = ""


class LastInsertionRequest(_Body):
    text: str = ""
    last_inserted: str = Field("", alias="lastInserted")


class RankRequest(_Body):
    transcript: str = ""


class ComposeRequest(_Body):
    template_id: str | None = Field(None, alias="templateId")
    template_name: str = Field("", alias="templateName")
    normal_befund_text: str = Field("", alias="normalBefundText")
    clinical_data: dict = Field(default_factory=dict, alias="clinicalData")
    transcript_text: str = Field("", alias="transcriptText")
    study_name: str | None = Field(None, alias="studyName")
    model_mode: Literal["standard", "expert"] = Field("standard", alias="modelMode")


class CopyRequest(_Body):
    html: str = ""
    icd10: str | None = None


def _resolve_template(req: ComposeRequest) -> Template:
    if req.template_id:
        template = get_template_store().get(req.template_id)
        if not template:
            raise HTTPException(status_code=404, detail="Template not found")
        return template
    if not req.template_name and not req.normal_befund_text:
        raise HTTPException(status_code=400, detail="templateId or normalBefundText required")
    return Template(id="", name=req.template_name, normal_befund_text=req.normal_befund_text)


@router.get("/version")
def version():
    return {"version": settings.app_version}


@router.get("/llm-status")
def llm_status():
    return {"configured": settings.llm_configured, "model": model_for_mode("standard")}


@router.post("/normalize")
def normalize(req: NormalizeRequest):
    return {"text": process_transcript(req.text, get_correction_store().load())}


@router.post("/normalize-last-insertion")
def normalize_last(req: LastInsertionRequest):
    text, normalized = normalize_last_insertion(req.text, req.last_inserted, get_correction_store().load())
    return {"text": text, "lastInserted": normalized}


@router.post("/rank-templates")
def rank(req: RankRequest):
    ranked = rank_templates(get_template_store().load(), req.transcript)
    return {"results": [score_json(s) for s in ranked]}


@router.post("/generate-report")
def generate(req: ComposeRequest):
    template = _resolve_template(req)
    report = generate_report(
        template,
        req.clinical_data,
        req.transcript_text,
        mode=req.model_mode,
        study_name=req.study_name,
    )
    return composed_json(report)


@router.post("/fallback-report")
def fallback(req: ComposeRequest):
    template = _resolve_template(req)
    report = compose_fallback_report(req.transcript_text, template, req.clinical_data, req.study_name)
    return composed_json(report)


@router.post("/copy-text")
def copy(req: CopyRequest):
    return {"text": copy_text(req.html, req.icd10)}


@router.post("/asr")
def asr(audio: UploadFile = File(...)):
    """Transcribe an uploaded dictation and run it through normalisation."""
    data = audio.file.read()
    if not data:
        raise HTTPException(status_code=400, detail="No audio data received")

    corrections = get_correction_store().load()
    keyterms = get_keyterms(get_template_store().load(), corrections)
    try:
        result = transcribe_buffer(
            data,
            content_type=audio.content_type or "audio/webm",
            keyterms=keyterms,
            label=audio.filename or "upload",
        )
    except TranscriptionError as e:
        logger.warning("Transcription failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e))

    return {
        "ok": True,
        "transcript": process_transcript(result.transcript_text, corrections),
        "confidence": result.confidence,
    }
