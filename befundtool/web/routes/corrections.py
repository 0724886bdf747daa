"""Correction dictionary CRUD."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from befundtool.report.types import CorrectionEntry
from befundtool.store import get_correction_store
from befundtool.web.routes.serialize import correction_json

router = APIRouter(prefix="/corrections")


class CorrectionBody(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = ""
    wrong: str = Field(min_length=1)
    correct: str = ""
    case_insensitive: bool = Field(True, alias="caseInsensitive")
    whole_word: bool = Field(True, alias="wholeWord")


@router.get("/")
def list_corrections():
    return [correction_json(c) for c in get_correction_store().load()]


@router.post("/", status_code=201)
def add_correction(body: CorrectionBody):
    entry = get_correction_store().add(
        body.wrong,
        body.correct,
        case_insensitive=body.case_insensitive,
        whole_word=body.whole_word,
    )
    return correction_json(entry)


@router.put("/")
def replace_corrections(body: list[CorrectionBody]):
    """Replace the whole dictionary; the list order is the application order."""
    store = get_correction_store()
    store.save_all([
        CorrectionEntry(
            id=b.id,
            wrong=b.wrong,
            correct=b.correct,
            case_insensitive=b.case_insensitive,
            whole_word=b.whole_word,
        )
        for b in body
    ])
    return [correction_json(c) for c in store.load()]


@router.delete("/{entry_id}")
def delete_correction(entry_id: str):
    if not get_correction_store().delete(entry_id):
        raise HTTPException(status_code=404, detail="Correction not found")
    return {"status": "ok"}
