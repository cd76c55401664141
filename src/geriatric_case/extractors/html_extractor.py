# src/geriatric_case/extractors/html_extractor.py
"""
Visible text from HTML documents.

Roughly what a browser's innerText gives: script/style/head content is
dropped, block-level elements and <br> start new lines, entities are
decoded.
"""

from html.parser import HTMLParser
from pathlib import Path
from typing import List
import logging
import re

HIDDEN_TAGS = {'script', 'style', 'head', 'title', 'noscript', 'template'}

BLOCK_TAGS = {
    'address', 'article', 'aside', 'blockquote', 'br', 'dd', 'div', 'dl', 'dt',
    'fieldset', 'figcaption', 'figure', 'footer', 'form', 'h1', 'h2', 'h3',
    'h4', 'h5', 'h6', 'header', 'hr', 'li', 'main', 'nav', 'ol', 'p', 'pre',
    'section', 'table', 'tr', 'ul',
}

_BLANK_LINES = re.compile(r'\n[ \t]*(?:\n[ \t]*)+')


class _VisibleTextParser(HTMLParser):

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.parts: List[str] = []
        self._hidden_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag in HIDDEN_TAGS:
            self._hidden_depth += 1
        elif tag in BLOCK_TAGS:
            self.parts.append('\n')
        elif tag in ('td', 'th'):
            self.parts.append('\t')

    def handle_startendtag(self, tag, attrs):
        if tag in BLOCK_TAGS:
            self.parts.append('\n')

    def handle_endtag(self, tag):
        if tag in HIDDEN_TAGS:
            self._hidden_depth = max(0, self._hidden_depth - 1)
        elif tag in BLOCK_TAGS:
            self.parts.append('\n')

    def handle_data(self, data):
        if not self._hidden_depth:
            self.parts.append(data)

    def text(self) -> str:
        text = ''.join(self.parts)
        lines = [' '.join(line.split()) for line in text.split('\n')]
        return _BLANK_LINES.sub('\n', '\n'.join(lines)).strip()


def extract_from_html(html_content) -> str:
    """
    Extract plain text from an HTML string.

    Args:
        html_content: HTML markup; non-strings and "" yield ""

    Returns:
        Visible text, one block per line
    """
    if not html_content or not isinstance(html_content, str):
        return ''

    parser = _VisibleTextParser()
    parser.feed(html_content)
    parser.close()
    return parser.text()


class HtmlTextExtractor:
    """Reads .html/.htm files (and Word-HTML .doc exports) as text."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def extract(self, html_path: Path) -> str:
        html_path = Path(html_path)
        content = html_path.read_text(encoding='utf-8-sig', errors='replace')
        text = extract_from_html(content)
        self.logger.debug(f"Extracted {len(text)} chars of HTML text from {html_path.name}")
        return text
