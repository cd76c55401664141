# ============================================================================
# src/geriatric_case/core/prompt_builder.py
# ============================================================================
"""
Geriatric Review Prompt Builder

Renders the fixed instruction template handed to an external AI reviewer.
Patient data is embedded verbatim; the prompt is plain text, not markup,
so nothing is escaped here.

When structured extraction found nothing at all, the raw imported text
becomes the carrier of the clinical content (the "raw text bypass").
"""

import re
from typing import Any, Callable, Dict, Optional

from .record import ValidationResult, read_field


PROMPT_TEMPLATE = """Act as a Senior Geriatrician.
I will provide clinical data. Please output a response with TWO SECTIONS:

SECTION 1: SAFETY AUDIT (Strict)
- Flag Drug Interactions.
- Flag Beers Criteria.

SECTION 2: CLINICAL SUMMARY (Professional)
- Case Presentation style.
- Assessment & Plan.

DATA:
ID: {ageSex}
HPI: {hpi}
MEDS/LABS: {meds}"""

REQUIRED_FIELDS = ['age_sex', 'hpi', 'meds']

# Template placeholder for each required field
PLACEHOLDERS = {
    'ageSex': 'age_sex',
    'hpi': 'hpi',
    'meds': 'meds',
}

PLACEHOLDER_PATTERN = re.compile(r'\{(ageSex|hpi|meds)\}')

RAW_TEXT_AGE_SEX = 'See below'
RAW_TEXT_HPI = 'See clinical data below'

# UI field ids read by generate_magic_prompt()
FIELD_IDS = {
    'age_sex': 'age_sex',
    'hpi': 'hpi',
    'meds': 'meds',
    'raw_text': 'raw-text',
}


def _as_text(value: Any) -> str:
    if value is None:
        return ''
    return value if isinstance(value, str) else str(value)


def _is_blank(value: Any) -> bool:
    return not value or (isinstance(value, str) and value.strip() == '')


def _uses_raw_text(data: Any) -> bool:
    """True when every structured field is blank and raw text is present."""
    if data is None:
        return False
    if not all(_is_blank(read_field(data, name)) for name in REQUIRED_FIELDS):
        return False
    return not _is_blank(read_field(data, 'raw_text'))


def fill_template(template: str, values: Dict[str, str]) -> str:
    """
    Substitute the first occurrence of each placeholder in one pass.

    Inserted values are never re-scanned, so patient text containing
    "{hpi}" stays literal.
    """
    seen = set()

    def substitute(match: re.Match) -> str:
        placeholder = match.group(1)
        if placeholder in seen:
            return match.group(0)
        seen.add(placeholder)
        return values.get(PLACEHOLDERS[placeholder], '')

    return PLACEHOLDER_PATTERN.sub(substitute, template)


def generate_prompt(data: Any, template: Optional[str] = None) -> str:
    """
    Generate the reviewer prompt from patient data.

    Args:
        data: ClinicalRecord, PromptRequest or mapping with age_sex/hpi/meds
              and optional raw_text (camelCase keys accepted)
        template: Custom template; defaults to the request's own template,
                  then PROMPT_TEMPLATE

    Returns:
        The rendered prompt
    """
    if template is None:
        template = read_field(data, 'template') or PROMPT_TEMPLATE

    if _uses_raw_text(data):
        values = {
            'age_sex': RAW_TEXT_AGE_SEX,
            'hpi': RAW_TEXT_HPI,
            'meds': _as_text(read_field(data, 'raw_text')),
        }
    else:
        values = {name: _as_text(read_field(data, name)) for name in REQUIRED_FIELDS}

    return fill_template(template, values)


def validate_prompt_data(data: Any, allow_bypass: bool = False) -> ValidationResult:
    """
    Check the required prompt fields.

    Failures are reported in the result, never raised; callers block
    prompt delivery when is_valid is False.

    Args:
        data: Same shapes accepted by generate_prompt()
        allow_bypass: Accept raw text when every structured field is missing

    Returns:
        ValidationResult with missing fields in a fixed order
    """
    if data is None:
        return ValidationResult(
            is_valid=False,
            missing=list(REQUIRED_FIELDS),
            message='No data provided',
        )

    missing = [name for name in REQUIRED_FIELDS if _is_blank(read_field(data, name))]

    if allow_bypass and _uses_raw_text(data):
        return ValidationResult(
            is_valid=True,
            missing=missing,
            message='Using raw text for prompt generation',
            using_raw_text=True,
        )

    return ValidationResult(
        is_valid=not missing,
        missing=missing,
        message=(
            f"Missing required fields: {', '.join(missing)}"
            if missing else 'All fields present'
        ),
    )


def generate_magic_prompt(
    get_value: Callable[[str], str],
    notify: Callable[[str], None],
    deliver: Callable[[str], bool],
    allow_bypass: bool = False
) -> str:
    """
    Read the form, validate, render and deliver the prompt.

    Args:
        get_value: Returns the current value of a form field by id
        notify: Shows a message to the user
        deliver: Hands the prompt over (clipboard, file, ...); returns success
        allow_bypass: Allow the raw text fallback

    Returns:
        The prompt, or "" when validation failed
    """
    data = {name: get_value(field_id) or '' for name, field_id in FIELD_IDS.items()}

    validation = validate_prompt_data(data, allow_bypass)
    if not validation.is_valid:
        notify(
            "Please fill in the following required fields: "
            f"{', '.join(validation.missing)}"
        )
        return ''

    prompt = generate_prompt(data)

    if not deliver(prompt):
        notify('Failed to copy prompt. Please copy manually.')
    elif validation.using_raw_text:
        notify('Prompt generated from raw text and copied! Paste into AI.')
    else:
        notify('Prompt Copied! Paste into AI.')

    return prompt
