"""Schema check for the generation model's JSON answer.

Untyped JSON never gets past this module: ``parse_llm_report`` returns either
a validated ``LLMReport`` or a ``SchemaError`` describing what was wrong.
"""

import json
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_FACT = "Radiologische Bildgebung ist ein wesentlicher Bestandteil der modernen Diagnostik."
DEFAULT_SEARCH_TERM = "radiology diagnostic imaging"
DEFAULT_ICD10 = "Z03.9"


class DidYouKnow(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    fact: str = DEFAULT_FACT
    pubmed_search_term: str = Field(DEFAULT_SEARCH_TERM, alias="pubmedSearchTerm")


class LLMReport(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    revised_befund_text: str = Field(alias="revisedBefundText")
    beurteilung_text: str = Field(alias="beurteilungText")
    did_you_know: DidYouKnow = Field(default_factory=DidYouKnow, alias="didYouKnow")
    icd10: str = DEFAULT_ICD10

    @field_validator("revised_befund_text", "beurteilung_text")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("did_you_know", mode="before")
    @classmethod
    def _default_did_you_know(cls, v):
        return v if isinstance(v, dict) else {}

    @field_validator("icd10", mode="before")
    @classmethod
    def _default_icd10(cls, v):
        return v.strip() if isinstance(v, str) and v.strip() else DEFAULT_ICD10


@dataclass(frozen=True)
class SchemaError:
    message: str


def parse_llm_report(content: str) -> LLMReport | SchemaError:
    try:
        data = json.loads(content)
    except (TypeError, json.JSONDecodeError) as e:
        return SchemaError(f"Invalid JSON: {e}")
    if not isinstance(data, dict):
        return SchemaError("Expected a JSON object")
    try:
        return LLMReport.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        return SchemaError(f"Missing or invalid fields: {fields}")
