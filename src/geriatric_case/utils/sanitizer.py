# ============================================================================
# src/geriatric_case/utils/sanitizer.py
# ============================================================================
"""
Text sanitization for document exports.

Two separate pipelines:
- sanitize_text(): destructively removes markup tags and control characters
- escape_html(): turns HTML special characters into entities, losing nothing

HTML document exports use escape_html(sanitize_text(field)); slide text
uses sanitize_text() followed by truncate_text().
"""

import re

TAG_PATTERN = re.compile(r'<[^>]*>')

# ASCII control characters except \t (0x09), \n (0x0A) and \r (0x0D)
CONTROL_CHAR_PATTERN = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')

HTML_ESCAPE_MAP = {
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#39;',
}

HTML_ESCAPE_PATTERN = re.compile(r'[&<>"\']')


def strip_tags(text: str) -> str:
    """
    Remove markup tags until the text stops changing.

    Repeating the pass handles malformed input such as
    ``<script<script>...``. Every productive pass removes at least two
    characters, so the loop is bounded by the input length. No tag can
    start after the last ``>``, so each pass only scans up to it and
    stray ``<`` characters in the tail (``Cr <1.2``) are never retried.
    """
    for _ in range(len(text) + 1):
        cut = text.rfind('>') + 1
        stripped = TAG_PATTERN.sub('', text[:cut]) + text[cut:]
        if stripped == text:
            break
        text = stripped
    return text


def sanitize_text(text) -> str:
    """
    Make text safe to embed in generated documents.

    Strips tags, then control characters (newlines and tabs survive).
    Unicode and literal entities like ``&lt;`` pass through unchanged.

    Args:
        text: Arbitrary input; anything but a non-empty string yields ""

    Returns:
        Sanitized text
    """
    if not text or not isinstance(text, str):
        return ''

    text = strip_tags(text)
    return CONTROL_CHAR_PATTERN.sub('', text)


def escape_html(text) -> str:
    """Escape ``& < > " '`` in a single pass."""
    if not text or not isinstance(text, str):
        return ''
    return HTML_ESCAPE_PATTERN.sub(lambda m: HTML_ESCAPE_MAP[m.group()], text)


def truncate_text(text, max_length: int, suffix: str = '...') -> str:
    """
    Truncate text to exactly max_length characters including the suffix.

    Args:
        text: Text to truncate
        max_length: Maximum length of the result
        suffix: Marker appended when the text is cut

    Returns:
        The original text if it fits, otherwise the cut text plus suffix
    """
    if not text or not isinstance(text, str):
        return ''
    if len(text) <= max_length:
        return text
    keep = max(0, max_length - len(suffix))
    return text[:keep] + suffix
