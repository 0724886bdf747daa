"""Tests for Deepgram keyterms and transcription."""

import os

import pytest


def test_keyterms_base():
    from befundtool.transcriber.keyterms import get_keyterms

    terms = get_keyterms()
    assert "Befund" in terms
    assert "Beurteilung" in terms
    assert len(terms) <= 100


def test_keyterms_from_library():
    from befundtool.report.types import CorrectionEntry, Template
    from befundtool.transcriber.keyterms import get_keyterms

    terms = get_keyterms(
        templates=[Template(id="t", name="MRT Knie", keywords=("meniskus", "Leber"))],
        corrections=[CorrectionEntry(id="c", wrong="pirads", correct="PI-RADS")],
        hints=["Dr. Muster"],
    )
    assert terms[0] == "Dr. Muster"
    assert "PI-RADS" in terms
    assert "meniskus" in terms
    # "Leber" is already a base term
    assert [t.lower() for t in terms].count("leber") == 1


def test_keyterms_cap():
    from befundtool.report.types import Template
    from befundtool.transcriber.keyterms import MAX_KEYTERMS, get_keyterms

    templates = [Template(id="t", name="x", keywords=tuple(f"wort{i}" for i in range(300)))]
    assert len(get_keyterms(templates=templates)) == MAX_KEYTERMS


def test_transcribe_without_key_raises():
    from befundtool.transcriber.deepgram_client import TranscriptionError, transcribe_buffer

    with pytest.raises(TranscriptionError):
        transcribe_buffer(b"\x00" * 16)


@pytest.mark.skipif(not os.environ.get("DEEPGRAM_TEST_AUDIO"), reason="Requires live Deepgram key and sample audio")
def test_transcribe_live(monkeypatch):
    from befundtool.config import settings
    from befundtool.transcriber.deepgram_client import transcribe_buffer

    monkeypatch.setattr(settings, "deepgram_api_key", os.environ["DEEPGRAM_TEST_KEY"])
    with open(os.environ["DEEPGRAM_TEST_AUDIO"], "rb") as f:
        result = transcribe_buffer(f.read(), content_type="audio/wav", keyterms=["Befund"])
    assert result.transcript_text
