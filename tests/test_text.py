"""Tests for whitespace, spoken punctuation and dictionary corrections."""


def _entry(wrong, correct, case_insensitive=True, whole_word=True):
    from befundtool.report.types import CorrectionEntry
    return CorrectionEntry(id=wrong, wrong=wrong, correct=correct,
                           case_insensitive=case_insensitive, whole_word=whole_word)


def test_whitespace_collapses_runs_and_punctuation_spacing():
    from befundtool.report.text import normalize_whitespace

    assert normalize_whitespace("  Leber \t normgross ,  Milz  unauffällig .  ") == "Leber normgross, Milz unauffällig."


def test_whitespace_collapses_line_breaks():
    from befundtool.report.text import normalize_whitespace

    assert normalize_whitespace("Leber\n\nMilz") == "Leber Milz"
    assert normalize_whitespace("Befund \r\n\r\n\r\n Beurteilung") == "Befund Beurteilung"
    assert normalize_whitespace("Leber\n.") == "Leber."
    assert normalize_whitespace("Milz \n , Niere\t;") == "Milz, Niere;"


def test_whitespace_is_idempotent():
    from befundtool.report.text import normalize_whitespace

    samples = ["  a  ,b ;  c\n\n\n d  !", "x\t\ty ?", "", "\n \n"]
    for s in samples:
        once = normalize_whitespace(s)
        assert normalize_whitespace(once) == once


def test_non_string_input_is_empty():
    from befundtool.report.text import normalize_whitespace, process_transcript

    assert process_transcript(None) == ""
    assert process_transcript(42) == ""
    assert normalize_whitespace(["a"]) == ""


def test_spoken_punctuation():
    from befundtool.report.text import process_transcript

    assert process_transcript("Leber unauffällig komma Milz normal Punkt") == "Leber unauffällig, Milz normal."
    assert process_transcript("Zyste klammer auf 5 mm klammer zu") == "Zyste (5 mm)"


def test_spoken_paragraph_and_line():
    from befundtool.report.text import apply_spoken_punctuation, process_transcript

    assert apply_spoken_punctuation("Befund neuer absatz Beurteilung") == "Befund \n\n Beurteilung"
    assert apply_spoken_punctuation("eins neue zeile zwei") == "eins \n zwei"
    # The final whitespace stage folds the breaks into single spaces
    assert process_transcript("Befund neuer absatz Beurteilung") == "Befund Beurteilung"
    assert process_transcript("eins neue zeile zwei punkt") == "eins zwei."


def test_spoken_punctuation_is_whole_word():
    from befundtool.report.text import process_transcript

    # "punkt" inside a longer word stays
    assert process_transcript("Schwerpunkt Leber") == "Schwerpunkt Leber"


def test_correction_whole_word():
    from befundtool.report.text import apply_corrections

    entries = [_entry("ct", "CT")]
    assert apply_corrections("cta scan", entries) == "cta scan"
    assert apply_corrections("a ct scan", entries) == "a CT scan"


def test_correction_substring_and_case():
    from befundtool.report.text import apply_corrections

    assert apply_corrections("pirads3", [_entry("pirads", "PI-RADS ", whole_word=False)]) == "PI-RADS 3"
    assert apply_corrections("Ct und ct", [_entry("ct", "CT", case_insensitive=False)]) == "Ct und CT"


def test_correction_escapes_pattern_and_replacement():
    from befundtool.report.text import apply_corrections

    assert apply_corrections("x a+b y", [_entry("a+b", "A+B", whole_word=False)]) == "x A+B y"
    assert apply_corrections("x foo y", [_entry("foo", r"\1 \g<0>")]) == r"x \1 \g<0> y"


def test_corrections_apply_in_order():
    from befundtool.report.text import apply_corrections

    entries = [_entry("alpha", "beta"), _entry("beta", "gamma")]
    assert apply_corrections("alpha", entries) == "gamma"
    assert apply_corrections("alpha", list(reversed(entries))) == "beta"


def test_bad_entries_are_skipped():
    from befundtool.report.text import apply_corrections

    entries = [_entry("", "x"), _entry("same", "same"), _entry(None, "y"), _entry("leber", "Leber")]
    assert apply_corrections("leber", entries) == "Leber"


def test_process_transcript_with_corrections():
    from befundtool.report.text import process_transcript

    text = process_transcript("verdacht auf  pirads  vier komma  adik  reduziert", [
        _entry("pirads", "PI-RADS"),
        _entry("adik", "ADC"),
    ])
    assert text == "verdacht auf PI-RADS vier, ADC reduziert"


def test_incremental_and_bulk_agree():
    from befundtool.report.text import process_transcript

    utterance = "Milz  normal komma keine Läsion punkt"
    assert process_transcript(utterance) == process_transcript(process_transcript(utterance))


def test_normalize_last_insertion():
    from befundtool.report.text import normalize_last_insertion

    transcript = "milz komma normal. Leber unauffällig. milz komma normal"
    text, inserted = normalize_last_insertion(transcript, "milz komma normal")
    assert inserted == "milz, normal"
    # Only the last occurrence is rewritten
    assert text == "milz komma normal. Leber unauffällig. milz, normal"


def test_normalize_last_insertion_noop():
    from befundtool.report.text import normalize_last_insertion

    assert normalize_last_insertion("Leber.", "nicht da komma") == ("Leber.", "nicht da komma")
    assert normalize_last_insertion("Leber.", "Leber.") == ("Leber.", "Leber.")
    assert normalize_last_insertion("Leber.", "") == ("Leber.", "")
