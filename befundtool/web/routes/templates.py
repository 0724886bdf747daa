"""Template library CRUD."""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from befundtool.report.types import Template
from befundtool.store import get_template_store
from befundtool.web.routes.serialize import template_json

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/templates")


class TemplateBody(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(min_length=1)
    keywords: list[str] = Field(default_factory=list)
    normal_befund_text: str = Field("", alias="normalBefundText")


@router.get("/")
def list_templates():
    return [template_json(t) for t in get_template_store().load()]


@router.get("/{template_id}")
def get_template(template_id: str):
    template = get_template_store().get(template_id)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return template_json(template)


@router.post("/", status_code=201)
def create_template(body: TemplateBody):
    template = get_template_store().save(Template(
        id="",
        name=body.name,
        keywords=tuple(body.keywords),
        normal_befund_text=body.normal_befund_text,
    ))
    logger.info("Created template '%s' (%s)", template.name, template.id)
    return template_json(template)


@router.put("/{template_id}")
def update_template(template_id: str, body: TemplateBody):
    store = get_template_store()
    if not store.get(template_id):
        raise HTTPException(status_code=404, detail="Template not found")
    template = store.save(Template(
        id=template_id,
        name=body.name,
        keywords=tuple(body.keywords),
        normal_befund_text=body.normal_befund_text,
    ))
    return template_json(template)


@router.delete("/{template_id}")
def delete_template(template_id: str):
    if not get_template_store().delete(template_id):
        raise HTTPException(status_code=404, detail="Template not found")
    return {"status": "ok"}


@router.post("/restore-defaults")
def restore_defaults():
    added = get_template_store().append_missing_seed_templates()
    return {"status": "ok", "added": added}
