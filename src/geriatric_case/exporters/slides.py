# ============================================================================
# src/geriatric_case/exporters/slides.py
# ============================================================================
"""
PowerPoint Export

Builds a three-slide case deck (plus an overflow slide for long AI
responses) with python-pptx:

1. Title: "Geriatric Case", "<age/sex> - <initials>"
2. Clinical Context: HPI and meds, truncated
3. Analysis & Plan: the AI response, truncated to one slide
4. Plan (Cont.): the next block of the AI response, when needed

Slide text is sanitized and then truncated; layout is intentionally plain.
"""

from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Any, List, Optional, Union
import logging

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.util import Emu, Inches, Pt

from ..config import ExportSettings, export_settings
from ..core.record import CaseExport
from ..utils.exceptions import ExportError
from ..utils.file_utils import export_filename
from ..utils.logging import log_performance
from ..utils.sanitizer import sanitize_text, truncate_text

logger = logging.getLogger(__name__)

# 16:9, in inches
SLIDE_WIDTH = 10
SLIDE_HEIGHT = 5.625
BLANK_LAYOUT_INDEX = 6

Dimension = Union[float, str, None]


@dataclass
class SlideElement:
    """A text box; x/y in inches, w/h in inches or as "90%" of the slide."""
    text: str
    x: float
    y: float
    w: Dimension = None
    h: Dimension = None
    font_size: int = 14
    color: Optional[str] = None
    bold: bool = False


@dataclass
class SlideSpec:
    type: str  # "title", "content", "overflow"
    elements: List[SlideElement] = field(default_factory=list)


def create_slide_data(data: Any, settings: Optional[ExportSettings] = None) -> List[SlideSpec]:
    """
    Lay out the slides for a case.

    Args:
        data: CaseExport, record or mapping (age_sex, initials, hpi, meds, ai_response)
        settings: Limits, colors and fonts

    Returns:
        Slide definitions in order
    """
    settings = settings or export_settings
    case = data if isinstance(data, CaseExport) else CaseExport.from_data(data)
    colors, fonts = settings.COLORS, settings.FONTS
    limit = settings.MAX_TEXT_PER_SLIDE

    age_sex = sanitize_text(case.age_sex)
    initials = sanitize_text(case.initials)
    hpi = sanitize_text(case.hpi)
    meds = sanitize_text(case.meds)
    ai_response = sanitize_text(case.ai_response)

    slides = [
        SlideSpec(type='title', elements=[
            SlideElement('Geriatric Case', x=1, y=2, font_size=fonts['title'],
                         color=colors['primary'], bold=True),
            SlideElement(f'{age_sex} - {initials}', x=1, y=3, font_size=fonts['subtitle'],
                         color=colors['secondary']),
        ]),
        SlideSpec(type='content', elements=[
            SlideElement('Clinical Context', x=0.5, y=0.5, font_size=fonts['heading'],
                         color=colors['accent'], bold=True),
            SlideElement(f'HPI: {truncate_text(hpi, settings.MAX_HPI_LENGTH)}',
                         x=0.5, y=1, w='90%', h=2, font_size=fonts['body']),
            SlideElement(f'MEDS: {truncate_text(meds, settings.MAX_MEDS_LENGTH)}',
                         x=0.5, y=3.5, w='90%', h=2, font_size=fonts['small']),
        ]),
        SlideSpec(type='content', elements=[
            SlideElement('Analysis & Plan', x=0.5, y=0.5, font_size=fonts['heading'],
                         color=colors['highlight'], bold=True),
            SlideElement(truncate_text(ai_response, limit), x=0.5, y=1, w='90%', h='80%',
                         font_size=fonts['small'], color=colors['text']),
        ]),
    ]

    if len(ai_response) > limit:
        slides.append(SlideSpec(type='overflow', elements=[
            SlideElement('Plan (Cont.)', x=0.5, y=0.5, font_size=fonts['heading'],
                         color=colors['highlight']),
            SlideElement(ai_response[limit:limit * 2], x=0.5, y=1, w='90%', h='80%',
                         font_size=fonts['small']),
        ]))

    return slides


def _length(value: Dimension, total_inches: float, default_inches: float) -> Emu:
    if value is None:
        return Inches(default_inches)
    if isinstance(value, str) and value.endswith('%'):
        return Inches(total_inches * float(value[:-1]) / 100)
    return Inches(float(value))


class PPTExporter:
    """
    Renders slide definitions into a .pptx with python-pptx.

    Args:
        settings: Export settings; the module-level defaults when omitted
    """

    def __init__(self, settings: Optional[ExportSettings] = None):
        self.settings = settings or export_settings
        self.logger = logging.getLogger(__name__)

    def generate(self, data: Any) -> Presentation:
        """Build the presentation object for a case."""
        presentation = Presentation()
        presentation.slide_width = Inches(SLIDE_WIDTH)
        presentation.slide_height = Inches(SLIDE_HEIGHT)
        layout = presentation.slide_layouts[BLANK_LAYOUT_INDEX]

        specs = create_slide_data(data, self.settings)
        for spec in specs:
            slide = presentation.slides.add_slide(layout)
            for element in spec.elements:
                self._add_text(slide, element)

        self.logger.debug(f"Generated presentation with {len(specs)} slides")
        return presentation

    def _add_text(self, slide, element: SlideElement):
        width = _length(element.w, SLIDE_WIDTH, SLIDE_WIDTH - element.x - 0.5)
        height = _length(element.h, SLIDE_HEIGHT, 1)
        box = slide.shapes.add_textbox(Inches(element.x), Inches(element.y), width, height)

        frame = box.text_frame
        frame.word_wrap = True
        frame.text = element.text

        for paragraph in frame.paragraphs:
            for run in paragraph.runs:
                run.font.size = Pt(element.font_size)
                run.font.bold = element.bold
                if element.color:
                    run.font.color.rgb = RGBColor.from_string(element.color.upper())

    @log_performance(logger, "PPTX export")
    def to_bytes(self, data: Any) -> bytes:
        """Render the case deck to .pptx bytes."""
        buffer = BytesIO()
        try:
            self.generate(data).save(buffer)
        except Exception as e:
            self.logger.error(f"PPTX generation failed: {e}")
            raise ExportError(f"PPTX generation failed: {e}") from e
        return buffer.getvalue()

    def export(self, data: Any, path: Optional[Path] = None) -> Path:
        """
        Write the case deck to disk.

        Args:
            data: Case data
            path: Output file; defaults to Case_<initials>.pptx in the cwd

        Returns:
            Path of the written file
        """
        case = data if isinstance(data, CaseExport) else CaseExport.from_data(data)
        output = Path(path) if path else Path(export_filename(case.initials, 'pptx'))

        content = self.to_bytes(case)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(content)

        self.logger.info(f"Wrote {output} ({len(content)} bytes)")
        return output
