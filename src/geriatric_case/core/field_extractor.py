# ============================================================================
# src/geriatric_case/core/field_extractor.py
# ============================================================================
"""
Clinical Field Extraction

Pulls age/sex, HPI, medications and labs out of free-form clinical text.

Each field is independent and first-match-wins:
- Age/sex: first "85F" / "72 M" / "90 female" style token, kept verbatim
- Sections: a header (case-insensitive) followed by ':' or whitespace
  starts the capture, which runs until a line that begins with one of the
  section's stop headers, or the end of the text

Sections are located with a small scanner instead of a lazy regex with a
``\\n\\s*`` lookahead; the regex form goes quadratic on long runs of blank
lines, the scanner stays linear.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional, Pattern, Tuple

from .record import ClinicalRecord


@dataclass(frozen=True)
class SectionRule:
    """Header-to-next-header capture rule."""
    name: str
    triggers: Tuple[str, ...]
    stops: Tuple[str, ...]

    @property
    def trigger_pattern(self) -> Pattern:
        return _alternation(self.triggers, suffix=r'(?P<sep>[:\s]+)')

    @property
    def stop_pattern(self) -> Pattern:
        return _alternation(self.stops)


def _alternation(words: Tuple[str, ...], suffix: str = '') -> Pattern:
    # Alternatives keep their declared order; at one position the first
    # alternative that lets the whole pattern match wins.
    body = '|'.join(re.escape(word) for word in words)
    return re.compile(f'(?:{body}){suffix}', re.IGNORECASE)


AGE_SEX_PATTERN = re.compile(r'([0-9]{2,3}\s?(?:male|female|Male|Female|[MmFf]))')

HPI_RULE = SectionRule(
    name='hpi',
    triggers=('HPI', 'History of Present Illness', 'History'),
    stops=('PMH', 'Past Medical History', 'Meds', 'Medications', 'Assessment', 'Physical Exam'),
)

MEDS_RULE = SectionRule(
    name='meds',
    triggers=('Meds', 'Medications', 'Current Medications', 'Home Medications'),
    stops=('Labs', 'Laboratory', 'Plan', 'Assessment', 'Allergies'),
)

LABS_RULE = SectionRule(
    name='labs',
    triggers=('Labs', 'Laboratory', 'Lab Results'),
    stops=('Plan', 'Assessment', 'Imaging'),
)

PATTERNS = {
    'age_sex': AGE_SEX_PATTERN,
    'hpi': HPI_RULE,
    'meds': MEDS_RULE,
    'labs': LABS_RULE,
}


@lru_cache(maxsize=None)
def _compile_rule(rule: SectionRule) -> Tuple[Pattern, Pattern]:
    return rule.trigger_pattern, rule.stop_pattern


def _clean_capture(value: Optional[str]) -> Optional[str]:
    # An empty capture counts as no match; whitespace-only trims to ""
    if not value:
        return None
    return value.strip()


def extract_value(text, pattern: Pattern) -> Optional[str]:
    """
    Return the trimmed first capture group of pattern in text.

    Args:
        text: Source text (non-strings yield None)
        pattern: Compiled regex with at least one capture group

    Returns:
        Trimmed capture, or None when nothing matched
    """
    if not text or not isinstance(text, str):
        return None

    match = pattern.search(text)
    if match is None:
        return None
    return _clean_capture(match.group(1))


def _find_section_end(text: str, start: int, stop_pattern: Pattern, floor: int) -> int:
    """
    Index of the earliest newline at or after floor whose line (ignoring
    leading whitespace) opens with a stop header, else len(text).

    The newline may sit inside the trigger's own separator (a header line
    directly followed by a stop header line), in which case the returned
    index is below start.
    """
    for match in stop_pattern.finditer(text, start):
        header_at = match.start()
        # Walk back over the whitespace run in front of the header and
        # remember the earliest newline in it
        boundary = None
        pos = header_at - 1
        while pos >= floor and text[pos].isspace():
            if text[pos] == '\n':
                boundary = pos
            pos -= 1
        if boundary is not None:
            return boundary
    return len(text)


def extract_section(text, rule: SectionRule) -> Optional[str]:
    """
    Capture the body of the first section introduced by one of the rule's
    trigger headers.

    Args:
        text: Source text (non-strings yield None)
        rule: Section rule with trigger and stop headers

    Returns:
        Trimmed section body, or None when no trigger header is present
    """
    if not text or not isinstance(text, str):
        return None

    trigger_pattern, stop_pattern = _compile_rule(rule)
    trigger = trigger_pattern.search(text)
    if trigger is None:
        return None

    start = trigger.end()
    # The trigger keeps at least one separator character
    floor = trigger.start('sep') + 1
    end = _find_section_end(text, start, stop_pattern, floor)
    if end < start:
        # Stop header on the very next line; only separator characters are
        # left, so drop its colons and keep any whitespace
        return _clean_capture(text[floor:end].replace(':', ''))
    return _clean_capture(text[start:end])


def extract_clinical_data(text) -> ClinicalRecord:
    """
    Extract all clinical fields from a raw text blob.

    Args:
        text: Raw text from any importer; non-strings and "" give an empty record

    Returns:
        ClinicalRecord with None for every field that was not found
    """
    if not text or not isinstance(text, str):
        return ClinicalRecord()

    return ClinicalRecord(
        age_sex=extract_value(text, AGE_SEX_PATTERN),
        hpi=extract_section(text, HPI_RULE),
        meds=extract_section(text, MEDS_RULE),
        labs=extract_section(text, LABS_RULE),
    )


def smart_populate(text, set_field: Callable[[str, str], None]) -> ClinicalRecord:
    """
    Extract fields and push the non-empty ones into a form.

    Only age/sex, HPI and meds have form fields; labs are returned but
    not pushed.

    Args:
        text: Raw text to extract from
        set_field: Callback receiving (field_id, value)

    Returns:
        The extracted record
    """
    record = extract_clinical_data(text)

    for field_id in ('age_sex', 'hpi', 'meds'):
        value = getattr(record, field_id)
        if value:
            set_field(field_id, value)

    return record
