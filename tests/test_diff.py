"""Tests for token-level highlighting."""

BASELINE = "Leber normgross, homogene Parenchymstruktur."
REVISED = "Leber normgross. Zyste im rechten Leberlappen. Übrige Parenchymstruktur homogen."


def _assert_well_formed(segments):
    for seg in segments:
        assert seg.text
    for a, b in zip(segments, segments[1:]):
        assert a.is_highlight != b.is_highlight


def test_tokenize_keeps_delimiters():
    from befundtool.report.diff import tokenize

    assert tokenize("Leber normgross, homogen.") == ["Leber", " ", "normgross", ",", " ", "homogen", "."]


def test_identical_text_is_one_plain_segment():
    from befundtool.report.diff import compute_diff
    from befundtool.report.types import DiffSegment

    assert compute_diff(BASELINE, BASELINE) == [DiffSegment(BASELINE, False)]


def test_empty_inputs():
    from befundtool.report.diff import compute_diff
    from befundtool.report.types import DiffSegment

    assert compute_diff("", "Neu.") == [DiffSegment("Neu.", False)]
    assert compute_diff(None, "Neu.") == [DiffSegment("Neu.", False)]
    assert compute_diff("Alt.", "") == []


def test_scenario_highlights_added_sentence():
    from befundtool.report.diff import compute_diff

    segments = compute_diff(BASELINE, REVISED)
    _assert_well_formed(segments)

    # Removed baseline tokens never show up; everything else is the revision
    assert "".join(s.text for s in segments) == REVISED
    assert segments[0].text.startswith("Leber normgross")
    assert not segments[0].is_highlight
    highlighted = "".join(s.text for s in segments if s.is_highlight)
    for word in ("Zyste", "rechten", "Leberlappen", "Übrige"):
        assert word in highlighted
    assert "Parenchymstruktur" not in highlighted


def test_segments_alternate():
    from befundtool.report.diff import compute_diff

    segments = compute_diff("a b c d e", "a x c y e z")
    _assert_well_formed(segments)
    assert "".join(s.text for s in segments) == "a x c y e z"


def test_html_escapes_and_marks():
    from befundtool.report.diff import MARK_CLOSE, MARK_OPEN, highlight_differences

    out = highlight_differences("Leber normal.", "Leber normal.\n<b>Zyste</b> & Erguss.")
    assert "<b>" not in out
    assert "&lt;b&gt;Zyste&lt;/b&gt; &amp; Erguss" in out
    assert "<br/>" in out
    assert out.startswith("Leber normal")
    assert out.count(MARK_OPEN) == out.count(MARK_CLOSE) >= 1
