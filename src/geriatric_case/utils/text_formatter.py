# ============================================================================
# src/geriatric_case/utils/text_formatter.py
# ============================================================================
"""
Text Formatting Utilities

Cosmetic re-flow of extracted clinical text for generated documents:
- Collapses excessive spaces and blank lines
- Starts each sentence on its own line
- Soft-wraps long lines at word boundaries
- Normalizes medication lists to one drug per line

Nothing here is security related; see sanitizer.py for that. Slash
abbreviations (s/p, h/o, c/o) and units (mg, μg/mL, °C) are never touched.
"""

import re
import textwrap

DEFAULT_MAX_LINE_LENGTH = 80

MULTI_SPACE_PATTERN = re.compile(r' {2,}')
EXCESS_NEWLINES_PATTERN = re.compile(r'\n{3,}')
SENTENCE_BREAK_PATTERN = re.compile(r'([.!?]) +(?=[A-Z])')

# Medication list delimiters, in order of preference
MED_DELIMITERS = [
    ('newline', re.compile(r'\r?\n')),
    ('semicolon', re.compile(r';')),
    ('comma', re.compile(r',\s*(?=[A-Z])')),
]

# "1. Aspirin" loses its number, "0.5mg" keeps it
BULLET_PATTERN = re.compile(r'^(?:[•\-*]+\s*|\d+[.)](?:\s+|$))+')


def _wrap_line(line: str, width: int) -> str:
    if len(line) <= width:
        return line
    return '\n'.join(textwrap.wrap(
        line,
        width=width,
        break_long_words=False,
        break_on_hyphens=False,
    ))


def format_medical_text(text, max_line_length: int = DEFAULT_MAX_LINE_LENGTH) -> str:
    """
    Re-flow free clinical text for readability.

    Args:
        text: Raw text (non-strings and blank strings yield "")
        max_line_length: Lines longer than this are soft-wrapped

    Returns:
        Formatted text
    """
    if not isinstance(text, str) or not text.strip():
        return ''

    text = text.replace('\t', ' ')
    text = MULTI_SPACE_PATTERN.sub(' ', text)
    text = SENTENCE_BREAK_PATTERN.sub(r'\1\n', text)

    lines = [line.strip() for line in text.split('\n')]
    text = '\n'.join(lines)
    text = EXCESS_NEWLINES_PATTERN.sub('\n\n', text)

    width = max(1, int(max_line_length))
    wrapped = [_wrap_line(line, width) for line in text.split('\n')]

    return '\n'.join(wrapped).strip()


def _split_medications(text: str):
    for _name, pattern in MED_DELIMITERS:
        if pattern.search(text):
            return pattern.split(text)
    return [text]


def format_medication_list(text) -> str:
    """
    Put one medication per line.

    Splits on the first delimiter kind present (newline, semicolon, then a
    comma followed by a capital letter so dosing clauses stay intact),
    drops bullets and enumerations, and capitalizes each entry.
    """
    if not isinstance(text, str) or not text.strip():
        return ''

    entries = []
    for item in _split_medications(text.strip()):
        item = BULLET_PATTERN.sub('', item.strip()).strip()
        if not item:
            continue
        entries.append(item[0].upper() + item[1:])

    return '\n'.join(entries)
