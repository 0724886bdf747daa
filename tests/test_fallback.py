"""Tests for the local fallback composer."""

from befundtool.report.diff import MARK_CLOSE, MARK_OPEN


def _tpl(text, name="CT Abdomen"):
    from befundtool.report.types import Template
    return Template(id="t", name=name, normal_befund_text=text)


def test_split_sentences():
    from befundtool.report.fallback import split_sentences

    assert split_sentences("A. B!\nC?  ") == ["A.", "B!", "C?"]
    assert split_sentences("   ") == []
    assert split_sentences(None) == []


def test_classify_first_category_wins():
    from befundtool.report.fallback import classify_sentence

    assert classify_sentence("Hepatomegalie.") == "leber"
    assert classify_sentence("Leber und Milz vergrössert.") == "leber"
    assert classify_sentence("Aorta ektatisch.") == "gefaesse"
    assert classify_sentence("Patient klagt über Schmerzen.") is None


def test_scenario_liver_and_unmatched_blocks():
    from befundtool.report.fallback import compose_befund

    befund = compose_befund("Leber unauffällig.", "Zyste in der Leber. Patient klagt über Schmerzen.")
    assert befund == (
        "Leber unauffällig."
        f"<br/><br/>{MARK_OPEN}Zyste in der Leber.{MARK_CLOSE}"
        f"<br/><br/>{MARK_OPEN}Patient klagt über Schmerzen.{MARK_CLOSE}"
    )


def test_category_blocks_in_order_of_appearance():
    from befundtool.report.fallback import compose_befund

    befund = compose_befund("Basis.", "Milz normal. Leber gross. Milz klein.")
    assert befund == (
        "Basis."
        f"<br/><br/>{MARK_OPEN}Milz normal.{MARK_CLOSE} {MARK_OPEN}Milz klein.{MARK_CLOSE}"
        f"<br/><br/>{MARK_OPEN}Leber gross.{MARK_CLOSE}"
    )


def test_empty_template_body():
    from befundtool.report.fallback import NO_TEMPLATE_TEXT, compose_befund

    assert compose_befund("", "Leber gross.") == f"{MARK_OPEN}Leber gross.{MARK_CLOSE}"
    assert compose_befund("  ", "") == NO_TEMPLATE_TEXT


def test_template_body_without_dictation():
    from befundtool.report.fallback import compose_befund

    assert compose_befund("Leber unauffällig.\nMilz normal.", "") == "Leber unauffällig.<br/>Milz normal."


def test_dictation_is_escaped():
    from befundtool.report.fallback import compose_befund

    befund = compose_befund("A & B", "<script>alert(1)</script> in der Leber.")
    assert "<script>" not in befund
    assert "A &amp; B" in befund
    assert "&lt;script&gt;" in befund


def test_report_with_dictation():
    from befundtool.report.fallback import FALLBACK_IMPRESSION, compose_fallback_report

    report = compose_fallback_report(
        "Zyste in der Leber.",
        _tpl("Leber unauffällig."),
        {"klinischeAngaben": "Oberbauchschmerzen", "technik": "Nativ"},
    )
    assert report.used_fallback is True
    assert report.impression_text == FALLBACK_IMPRESSION
    assert report.sections.impression == f"{MARK_OPEN}{FALLBACK_IMPRESSION}{MARK_CLOSE}"
    assert report.sections.untersuchung == "CT Abdomen"
    assert "Oberbauchschmerzen" in report.html
    assert '<div class="befund-content">Leber unauffällig.<br/><br/>' in report.html


def test_report_without_dictation():
    from befundtool.report.fallback import compose_fallback_report

    report = compose_fallback_report("", _tpl("Leber unauffällig."))
    assert report.impression_text == "-"
    assert report.sections.impression == "-"
    assert MARK_OPEN not in report.html


def test_report_is_total_over_garbage():
    from befundtool.report.fallback import NO_TEMPLATE_TEXT, UNKNOWN_STUDY, compose_fallback_report

    report = compose_fallback_report(None, None, "not a mapping", None)
    assert UNKNOWN_STUDY in report.html
    assert NO_TEMPLATE_TEXT in report.html
    assert "<strong>KLINISCHE ANGABEN:</strong><br/>-" in report.html

    report = compose_fallback_report(123, _tpl(None, name=None), {"technik": 5})
    assert UNKNOWN_STUDY in report.html
