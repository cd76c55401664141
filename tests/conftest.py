# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import pytest


@pytest.fixture
def sample_note_text():
    """Typical admission note with every section present"""
    return (
        "Patient: 85F admitted from home.\n"
        "HPI: Patient presents with 3 days of confusion and decreased appetite.\n"
        "Daughter reports two falls this week.\n"
        "PMH: HTN, DM2, CKD stage 3\n"
        "Medications: Lisinopril 10mg daily, Metformin 500mg BID, Zolpidem 10mg qhs\n"
        "Labs: Na 128, Cr 1.8\n"
        "Plan: Hold zolpidem, recheck sodium in AM"
    )


@pytest.fixture
def sample_case():
    """Case data as handed to the exporters"""
    return {
        'age_sex': '85F',
        'initials': 'MJ',
        'hpi': 'Presents with 3 days of confusion.',
        'meds': 'Lisinopril 10mg daily\nZolpidem 10mg qhs',
        'ai_response': 'SECTION 1: SAFETY AUDIT\n- Zolpidem is on the Beers list.',
    }


@pytest.fixture
def txt_file(tmp_path, sample_note_text):
    path = tmp_path / "note.txt"
    path.write_text(sample_note_text, encoding="utf-8")
    return path


@pytest.fixture
def html_file(tmp_path):
    path = tmp_path / "note.html"
    path.write_text(
        "<html><head><title>Note</title><style>p {color: red}</style></head>"
        "<body><p>Patient: 72 M</p><p>HPI: Fell at home.</p>"
        "<script>alert('x')</script><p>Meds: Aspirin 81mg</p></body></html>",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def docx_file(tmp_path):
    """Word document built with python-docx"""
    from docx import Document

    document = Document()
    document.add_paragraph("Patient: 90 female")
    document.add_paragraph("HPI: Progressive memory loss over one year.")
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Donepezil"
    table.cell(0, 1).text = "5mg daily"

    path = tmp_path / "note.docx"
    document.save(str(path))
    return path


@pytest.fixture
def pptx_file(tmp_path):
    """Two-slide deck built with python-pptx"""
    from pptx import Presentation
    from pptx.util import Inches

    presentation = Presentation()
    layout = presentation.slide_layouts[6]
    for text in ("Patient: 78M", "HPI: Recurrent falls"):
        slide = presentation.slides.add_slide(layout)
        box = slide.shapes.add_textbox(Inches(1), Inches(1), Inches(6), Inches(1))
        box.text_frame.text = text

    path = tmp_path / "case.pptx"
    presentation.save(str(path))
    return path


@pytest.fixture
def pdf_file(tmp_path):
    """Single-page text PDF built with reportlab"""
    from reportlab.lib.pagesizes import letter
    from reportlab.pdfgen import canvas

    path = tmp_path / "note.pdf"
    pdf = canvas.Canvas(str(path), pagesize=letter)
    pdf.drawString(72, 720, "Patient: 88F")
    pdf.drawString(72, 700, "HPI: Weight loss and fatigue for two months")
    pdf.save()
    return path


@pytest.fixture
def png_file(tmp_path):
    from PIL import Image

    path = tmp_path / "scan.png"
    Image.new("RGB", (200, 100), "white").save(path)
    return path
