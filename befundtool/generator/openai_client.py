"""OpenAI chat-completions wrapper for single-pass report generation."""

import logging
import time
from typing import Literal

from openai import OpenAI, OpenAIError

from befundtool.config import settings
from befundtool.config_store import get_config_store
from befundtool.generator.prompts import build_user_prompt
from befundtool.generator.schema import LLMReport, SchemaError, parse_llm_report

logger = logging.getLogger(__name__)

ModelMode = Literal["standard", "expert"]


class GenerationError(RuntimeError):
    """The generation model could not produce a usable report."""

    def __init__(self, message: str, name: str = "GenerationError"):
        super().__init__(message)
        self.name = name


def model_for_mode(mode: ModelMode) -> str:
    store = get_config_store()
    if mode == "expert":
        return store.get_global("openai_expert_model") or settings.openai_expert_model
    return store.get_global("openai_model") or settings.openai_model


def _build_request(model: str, system_prompt: str, user_prompt: str, mode: ModelMode) -> dict:
    if mode == "expert":
        # Reasoning models take no system role and no response_format
        return {
            "model": model,
            "messages": [{"role": "user", "content": system_prompt + "\n\n" + user_prompt}],
        }
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "response_format": {"type": "json_object"},
        "max_completion_tokens": settings.openai_max_completion_tokens,
    }


def get_client() -> OpenAI:
    if not settings.llm_configured:
        raise GenerationError("OPENAI_API_KEY not configured", name="ConfigError")
    return OpenAI(api_key=settings.openai_api_key)


def generate_report(
    normal_befund_text: str,
    transcript_text: str,
    clinical_data: dict,
    mode: ModelMode = "standard",
    client: OpenAI | None = None,
) -> LLMReport:
    """Ask the model to merge the dictation into the template baseline.

    Raises GenerationError on configuration, vendor or schema failures.
    """
    client = client or get_client()
    model = model_for_mode(mode)
    request = _build_request(
        model,
        get_config_store().get_system_prompt(),
        build_user_prompt(normal_befund_text, transcript_text, clinical_data),
        mode,
    )

    logger.info("Requesting report from %s (%s mode, %d chars dictated)", model, mode, len(transcript_text))
    start = time.monotonic()
    try:
        completion = client.chat.completions.create(**request)
    except OpenAIError as e:
        raise GenerationError(f"OpenAI API error: {e}", name="LLMError") from e
    elapsed_ms = int((time.monotonic() - start) * 1000)

    content = ""
    if completion.choices:
        content = completion.choices[0].message.content or ""
    if not content:
        raise GenerationError("LLM returned empty response")

    result = parse_llm_report(content)
    if isinstance(result, SchemaError):
        raise GenerationError(f"LLM returned invalid JSON schema: {result.message}")

    logger.info("Report generated by %s in %d ms", model, elapsed_ms)
    return result
