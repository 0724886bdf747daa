"""Report generation: model-backed merge with a local fallback."""

import logging
from collections.abc import Mapping, Sequence

from openai import OpenAIError

from befundtool.generator.openai_client import GenerationError, ModelMode
from befundtool.generator import openai_client
from befundtool.report.assembler import assemble_revised_report
from befundtool.report.fallback import compose_fallback_report
from befundtool.report.matcher import rank_templates
from befundtool.report.text import as_text
from befundtool.report.types import ComposedReport, Template

logger = logging.getLogger(__name__)


def resolve_template_id(
    templates: Sequence[Template],
    transcript: str,
    selected_id: str | None,
    manual_override: bool,
    auto_suggest: bool = True,
) -> str | None:
    """Effective template for a report.

    A manual choice always wins; otherwise the matcher's suggestion, then
    whatever was stored before.
    """
    if manual_override:
        return selected_id
    if auto_suggest and as_text(transcript).strip():
        ranked = rank_templates(templates, transcript)
        if ranked:
            return ranked[0].template.id
    return selected_id


def _fallback(
    template: Template,
    clinical_data: Mapping,
    transcript: str,
    study_name: str | None,
    error: Exception,
    name: str,
) -> ComposedReport:
    report = compose_fallback_report(transcript, template, clinical_data, study_name)
    report.error = {
        "name": name,
        "message": str(error),
    }
    return report


def generate_report(
    template: Template,
    clinical_data: Mapping | None,
    transcript: str,
    mode: ModelMode = "standard",
    study_name: str | None = None,
    client=None,
) -> ComposedReport:
    """Compose a report, falling back to local composition on any model failure."""
    clinical_data = dict(clinical_data) if isinstance(clinical_data, Mapping) else {}
    transcript = as_text(transcript)

    try:
        result = openai_client.generate_report(
            template.normal_befund_text,
            transcript,
            clinical_data,
            mode=mode,
            client=client,
        )
    except GenerationError as e:
        if e.name == "ConfigError":
            logger.info("No generation model configured, using local fallback")
        else:
            logger.warning("Report generation failed, using local fallback: %s", e)
        return _fallback(template, clinical_data, transcript, study_name, e, e.name)
    except OpenAIError as e:
        logger.warning("OpenAI request failed, using local fallback: %s", e)
        return _fallback(template, clinical_data, transcript, study_name, e, "LLMError")
    except Exception as e:
        # Every model failure ends in the local fallback
        logger.exception("Unexpected error during report generation, using local fallback")
        return _fallback(template, clinical_data, transcript, study_name, e, "GenerationError")

    html, sections = assemble_revised_report(
        template,
        clinical_data,
        result.revised_befund_text,
        result.beurteilung_text,
        study_name=study_name,
    )
    return ComposedReport(
        html=html,
        sections=sections,
        impression_text=result.beurteilung_text,
        used_fallback=False,
        did_you_know={
            "fact": result.did_you_know.fact,
            "pubmedSearchTerm": result.did_you_know.pubmed_search_term,
        },
        icd10=result.icd10,
    )
