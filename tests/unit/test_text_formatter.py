# ============================================================================
# FILE: tests/unit/test_text_formatter.py
# ============================================================================
"""
Unit tests for clinical text and medication list formatting
"""

import re

import pytest

from geriatric_case.utils.text_formatter import format_medical_text, format_medication_list


@pytest.mark.parametrize("value", [None, 123, {}, "", "   "])
def test_invalid_or_blank_input(value):
    assert format_medical_text(value) == ""
    assert format_medication_list(value) == ""


# ----------------------------------------------------------------------------
# format_medical_text
# ----------------------------------------------------------------------------

def test_collapses_whitespace():
    text = "Patient   has    hypertension.\n\n\n\nPatient   also   has   diabetes."
    result = format_medical_text(text)
    assert not re.search(r"\n{3,}", result)
    assert "  " not in result
    assert result == "Patient has hypertension.\n\nPatient also has diabetes."


def test_sentence_breaks():
    result = format_medical_text("Patient is 85 years old. Has hypertension. Takes aspirin daily.")
    assert result.split("\n") == [
        "Patient is 85 years old.",
        "Has hypertension.",
        "Takes aspirin daily.",
    ]


def test_no_break_before_lowercase_or_numbers():
    result = format_medical_text("Na was 128 mg/dL. then improved. 3 doses given.")
    assert result == "Na was 128 mg/dL. then improved. 3 doses given."


def test_keeps_abbreviations_and_units():
    text = "s/p CABG, h/o CHF, c/o SOB. Aspirin 81mg daily, Metformin 1000mg twice daily"
    result = format_medical_text(text)
    for token in ("s/p", "h/o", "c/o", "81mg", "1000mg"):
        assert token in result


def test_wraps_long_lines():
    line = (
        "Patient has a very long history of multiple medical conditions including "
        "hypertension, diabetes, chronic kidney disease, congestive heart failure, and "
        "chronic obstructive pulmonary disease with recent exacerbation"
    )
    result = format_medical_text(line, max_line_length=60)
    lines = result.split("\n")
    assert len(lines) > 1
    assert all(len(l) <= 60 for l in lines)
    assert " ".join(lines) == line


def test_does_not_split_long_words():
    word = "pneumonoultramicroscopicsilicovolcanoconiosis"
    assert format_medical_text(word, max_line_length=10) == word


def test_paragraphs_preserved():
    result = format_medical_text("Paragraph 1.\n\nParagraph 2.\n\nParagraph 3.")
    assert result == "Paragraph 1.\n\nParagraph 2.\n\nParagraph 3."


# ----------------------------------------------------------------------------
# format_medication_list
# ----------------------------------------------------------------------------

def test_split_by_newlines():
    result = format_medication_list("Aspirin 81mg daily\nMetformin 1000mg BID\nLisinopril 10mg daily")
    assert result.split("\n") == ["Aspirin 81mg daily", "Metformin 1000mg BID", "Lisinopril 10mg daily"]


def test_split_by_semicolons():
    result = format_medication_list("Aspirin 81mg daily; Metformin 1000mg BID; Lisinopril 10mg daily")
    assert len(result.split("\n")) == 3


def test_split_by_comma_before_capital():
    result = format_medication_list("Aspirin 81mg daily, Metformin 1000mg BID, Lisinopril 10mg daily")
    assert result.split("\n") == ["Aspirin 81mg daily", "Metformin 1000mg BID", "Lisinopril 10mg daily"]


def test_comma_inside_dosing_clause_kept():
    result = format_medication_list("Metformin 500mg, with meals, twice daily")
    assert result == "Metformin 500mg, with meals, twice daily"


def test_newlines_win_over_other_delimiters():
    result = format_medication_list("Aspirin 81mg; Metformin 1000mg, Lisinopril 10mg\nAtorvastatin 20mg")
    assert result.split("\n") == ["Aspirin 81mg; Metformin 1000mg, Lisinopril 10mg", "Atorvastatin 20mg"]


def test_strips_bullets():
    result = format_medication_list("• Aspirin 81mg\n- Metformin 1000mg\n* Lisinopril 10mg")
    assert result == "Aspirin 81mg\nMetformin 1000mg\nLisinopril 10mg"


def test_strips_enumerations():
    result = format_medication_list(
        "1. Aspirin 81mg PO daily\n2. Metformin 1000mg PO BID with meals\n3) Lisinopril 10mg PO daily for HTN"
    )
    lines = result.split("\n")
    assert lines == [
        "Aspirin 81mg PO daily",
        "Metformin 1000mg PO BID with meals",
        "Lisinopril 10mg PO daily for HTN",
    ]


def test_decimal_doses_survive():
    assert format_medication_list("0.5mg lorazepam qhs") == "0.5mg lorazepam qhs"


def test_capitalizes_and_trims():
    result = format_medication_list("  aspirin 81mg  \n\n  metformin 1000mg  ")
    assert result == "Aspirin 81mg\nMetformin 1000mg"
