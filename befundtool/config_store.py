"""Layered config: SQLite → .env → defaults.

Usage:
    from befundtool.config_store import get_config_store

    model = get_config_store().get_global("openai_model")
    prompt = get_config_store().get_system_prompt()
"""

import logging

from befundtool.config import settings
from befundtool.models import GlobalSetting

logger = logging.getLogger(__name__)

# Keys editable at runtime; the ones with a .env counterpart fall back to it
_GLOBAL_KEYS = {
    "openai_model": "openai_model",
    "openai_expert_model": "openai_expert_model",
    "deepgram_model": "deepgram_model",
    "deepgram_language": "deepgram_language",
    "auto_suggest": None,
    "system_prompt": None,
}

_DEFAULTS = {
    "auto_suggest": "true",
}


class ConfigStore:
    def __init__(self, session_factory):
        self._session_factory = session_factory

    def get_global(self, key: str) -> str | None:
        with self._session_factory() as session:
            row = session.query(GlobalSetting).filter_by(key=key).first()
            if row and row.value is not None and row.value != "":
                return row.value
        # Fall back to .env / defaults
        attr = _GLOBAL_KEYS.get(key)
        if attr:
            return str(getattr(settings, attr, "")) or None
        return _DEFAULTS.get(key)

    def get_all_globals(self) -> dict[str, str]:
        result = {}
        for key in _GLOBAL_KEYS:
            result[key] = self.get_global(key) or ""
        return result

    def save_globals(self, data: dict[str, str]):
        with self._session_factory() as session:
            for key, value in data.items():
                if key not in _GLOBAL_KEYS:
                    continue
                row = session.query(GlobalSetting).filter_by(key=key).first()
                if row:
                    row.value = value
                else:
                    session.add(GlobalSetting(key=key, value=value))
            session.commit()
        logger.info("Updated global settings: %s", ", ".join(sorted(k for k in data if k in _GLOBAL_KEYS)))

    def get_system_prompt(self) -> str:
        from befundtool.generator.prompts import DEFAULT_SYSTEM_PROMPT
        prompt = self.get_global("system_prompt")
        return prompt if prompt and prompt.strip() else DEFAULT_SYSTEM_PROMPT

    def auto_suggest_enabled(self) -> bool:
        return (self.get_global("auto_suggest") or "true").lower() in ("1", "true", "yes", "on")


# Module-level singleton, initialized lazily after database.py sets up SessionLocal
_config_store: ConfigStore | None = None


def get_config_store() -> ConfigStore:
    global _config_store
    if _config_store is None:
        from befundtool.database import SessionLocal
        _config_store = ConfigStore(SessionLocal)
    return _config_store
