"""Deepgram prerecorded transcription for dictation uploads."""

import logging
import time
from dataclasses import dataclass

from deepgram import DeepgramClient, FileSource, PrerecordedOptions

from befundtool.config import settings
from befundtool.config_store import get_config_store

logger = logging.getLogger(__name__)


class TranscriptionError(RuntimeError):
    pass


@dataclass
class TranscriptionResult:
    transcript_text: str
    confidence: float
    request_id: str
    used_keyterms: bool
    processing_duration_ms: int


def _build_options(keyterms: list[str] | None = None) -> PrerecordedOptions:
    store = get_config_store()
    model = store.get_global("deepgram_model") or settings.deepgram_model
    language = store.get_global("deepgram_language") or settings.deepgram_language
    options = PrerecordedOptions(
        model=model,
        language=language,
        smart_format=True,
        punctuate=True,
        numerals=True,
    )
    if keyterms:
        options.keywords = keyterms
    return options


def _parse_response(response) -> tuple[str, float, str]:
    alternatives = response.results.channels[0].alternatives if response.results.channels else []
    if not alternatives:
        return "", 0.0, ""
    alt = alternatives[0]
    request_id = response.metadata.request_id if response.metadata else ""
    return alt.transcript or "", alt.confidence or 0.0, request_id


def transcribe_buffer(
    audio_data: bytes,
    content_type: str = "audio/webm",
    keyterms: list[str] | None = None,
    label: str = "upload",
) -> TranscriptionResult:
    """Transcribe audio bytes from memory.

    Keyword hints are sent on the first attempt; if Deepgram rejects the
    request or returns nothing, the upload is retried once without them.
    """
    if not settings.deepgram_api_key.strip():
        raise TranscriptionError("DEEPGRAM_API_KEY not configured")
    if not audio_data:
        raise TranscriptionError("No audio data received")

    client = DeepgramClient(settings.deepgram_api_key)
    payload: FileSource = {"buffer": audio_data}

    attempts = [keyterms, None] if keyterms else [None]
    last_error: Exception | None = None
    for hints in attempts:
        logger.info(
            "Sending %s to Deepgram (%d bytes, %s, %d keyterms)",
            label, len(audio_data), content_type, len(hints or []),
        )
        start = time.monotonic()
        try:
            response = client.listen.rest.v("1").transcribe_file(payload, _build_options(hints))
        except Exception as e:
            last_error = e
            logger.warning("Deepgram request for %s failed: %s", label, e)
            continue
        elapsed_ms = int((time.monotonic() - start) * 1000)

        text, confidence, request_id = _parse_response(response)
        if not text.strip() and hints:
            logger.info("Empty transcript for %s with keyterms, retrying without", label)
            continue
        return TranscriptionResult(
            transcript_text=text,
            confidence=confidence,
            request_id=request_id,
            used_keyterms=bool(hints),
            processing_duration_ms=elapsed_ms,
        )

    if last_error is not None:
        raise TranscriptionError(f"Deepgram transcription failed: {last_error}") from last_error
    return TranscriptionResult("", 0.0, "", False, 0)
