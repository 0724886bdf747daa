"""Runtime settings: view/edit the global config."""

import logging

from fastapi import APIRouter, Form
from fastapi.responses import RedirectResponse

from befundtool.config_store import get_config_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings")


@router.get("/")
def get_settings():
    return get_config_store().get_all_globals()


@router.post("/global")
def save_global(
    openai_model: str | None = Form(None),
    openai_expert_model: str | None = Form(None),
    deepgram_model: str | None = Form(None),
    deepgram_language: str | None = Form(None),
    auto_suggest: str = Form("false"),  # unchecked checkbox sends nothing
    system_prompt: str | None = Form(None),
):
    # Fields missing from the post keep their stored value
    data = {
        "openai_model": openai_model,
        "openai_expert_model": openai_expert_model,
        "deepgram_model": deepgram_model,
        "deepgram_language": deepgram_language,
        "system_prompt": system_prompt,
    }
    data = {k: v for k, v in data.items() if v is not None}
    data["auto_suggest"] = auto_suggest
    get_config_store().save_globals(data)
    logger.info("Global settings updated")
    return RedirectResponse("/settings/", status_code=303)
