"""Tests for settings, runtime config and the template/correction stores."""


def test_settings_from_env(monkeypatch):
    from befundtool.config import Settings

    monkeypatch.setenv("OPENAI_MODEL", "gpt-test")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    s = Settings()
    assert s.openai_model == "gpt-test"
    assert s.llm_configured is True
    assert s.sqlite_url.startswith("sqlite:///")


def test_settings_defaults():
    from befundtool.config import settings

    assert settings.llm_configured is False
    assert settings.deepgram_language == "de-CH"


def test_config_store_layering():
    from befundtool.config import settings
    from befundtool.config_store import get_config_store
    from befundtool.generator.prompts import DEFAULT_SYSTEM_PROMPT

    store = get_config_store()
    assert store.get_global("openai_model") == settings.openai_model
    assert store.auto_suggest_enabled() is True
    assert store.get_system_prompt() == DEFAULT_SYSTEM_PROMPT

    store.save_globals({"openai_model": "gpt-db", "auto_suggest": "false", "unknown": "x"})
    try:
        assert store.get_global("openai_model") == "gpt-db"
        assert store.auto_suggest_enabled() is False
        assert "unknown" not in store.get_all_globals()
    finally:
        store.save_globals({"openai_model": "", "auto_suggest": ""})
    assert store.get_global("openai_model") == settings.openai_model
    assert store.auto_suggest_enabled() is True


def test_seeded_library():
    from befundtool.seed import DEFAULT_CORRECTIONS, DEFAULT_TEMPLATES
    from befundtool.store import get_correction_store, get_template_store

    ids = {t.id for t in get_template_store().load()}
    assert {t.id for t in DEFAULT_TEMPLATES} <= ids
    assert [c.id for c in get_correction_store().load()][:len(DEFAULT_CORRECTIONS)] == [c.id for c in DEFAULT_CORRECTIONS]


def test_template_store_roundtrip():
    from befundtool.report.types import Template
    from befundtool.store import get_template_store

    store = get_template_store()
    saved = store.save(Template(id="", name="Test Vorlage", keywords=("Hals", "hals", " ", "Schilddrüse")))
    try:
        assert saved.id.startswith("tpl-")
        assert saved.keywords == ("Hals", "Schilddrüse")
        assert saved.updated_at > 0
        assert store.get(saved.id) == saved
    finally:
        assert store.delete(saved.id) is True
    assert store.get(saved.id) is None
    assert store.delete(saved.id) is False


def test_append_missing_seed_templates():
    from befundtool.store import get_template_store

    store = get_template_store()
    original = store.get("tpl-mrt-knie")
    store.delete("tpl-mrt-knie")
    assert store.append_missing_seed_templates() == 1
    assert store.get("tpl-mrt-knie").normal_befund_text == original.normal_befund_text
    assert store.append_missing_seed_templates() == 0


def test_correction_store_order():
    from befundtool.store import get_correction_store

    store = get_correction_store()
    before = store.load()
    try:
        entry = store.add("lebr", "Leber")
        assert store.load()[-1] == entry
        store.save_all(list(reversed(store.load())))
        assert store.load()[0].id == entry.id
    finally:
        store.save_all(before)
    assert store.load() == before
