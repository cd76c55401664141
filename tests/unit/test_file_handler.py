# ============================================================================
# FILE: tests/unit/test_file_handler.py
# ============================================================================
"""
Unit tests for document import: extension routing and per-format extractors
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from geriatric_case.core import extract_clinical_data
from geriatric_case.exporters import DocExporter
from geriatric_case.extractors import (
    SUPPORTED_EXTENSIONS,
    FileHandler,
    extract_from_html,
    get_file_category,
    get_file_extension,
    handle_file,
    is_extension_supported,
)
from geriatric_case.extractors.ocr_extractor import OCRExtractor, load_image_for_ocr
from geriatric_case.extractors.office_extractor import DocxTextExtractor, PptxTextExtractor
from geriatric_case.extractors.pdf_extractor import PDFTextExtractor
from geriatric_case.utils.exceptions import (
    DocumentImportError,
    TextExtractionError,
    UnsupportedFileTypeError,
)


class FakeExtractor:
    """Records calls and returns canned text"""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def extract(self, path):
        self.calls.append(Path(path))
        if self.error:
            raise self.error
        return self.text


# ----------------------------------------------------------------------------
# Extensions
# ----------------------------------------------------------------------------

@pytest.mark.parametrize("filename,expected", [
    ("note.PDF", "pdf"),
    ("case.final.pptx", "pptx"),
    ("/tmp/scan.JPeG", "jpeg"),
    ("README", ""),
    ("", ""),
    (None, ""),
    (42, ""),
])
def test_get_file_extension(filename, expected):
    assert get_file_extension(filename) == expected


def test_supported_extensions():
    for extensions in SUPPORTED_EXTENSIONS.values():
        for ext in extensions:
            assert is_extension_supported(ext)
            assert is_extension_supported(ext.upper())
    assert not is_extension_supported("exe")
    assert not is_extension_supported("")


def test_file_categories():
    assert get_file_category("pptx") == "presentation"
    assert get_file_category("doc") == "document"
    assert get_file_category("htm") == "text"
    assert get_file_category("PNG") == "image"
    assert get_file_category("xls") is None


# ----------------------------------------------------------------------------
# FileHandler routing
# ----------------------------------------------------------------------------

def test_no_file():
    with pytest.raises(DocumentImportError, match="No file provided"):
        FileHandler().handle_file(None)


def test_unsupported_extension(tmp_path):
    path = tmp_path / "virus.exe"
    path.write_bytes(b"MZ")
    with pytest.raises(UnsupportedFileTypeError, match=r"Unsupported file type: \.exe") as exc:
        FileHandler().handle_file(path)
    assert exc.value.extension == "exe"


def test_missing_file_reports_error(tmp_path):
    errors = []
    with pytest.raises(DocumentImportError, match="File not found"):
        FileHandler().handle_file(tmp_path / "gone.txt", on_error=errors.append)
    assert len(errors) == 1


def test_status_callbacks(txt_file):
    statuses, successes = [], []
    text = FileHandler().handle_file(txt_file, on_status=statuses.append, on_success=successes.append)
    assert "HPI:" in text
    assert statuses == ["Reading..."]
    assert successes == ["Success!"]


def test_image_status_and_routing(tmp_path):
    path = tmp_path / "photo.JPG"
    path.write_bytes(b"not really a jpeg")
    fake = FakeExtractor("Patient: 81F")
    statuses = []

    text = FileHandler({"image": fake}).handle_file(path, on_status=statuses.append)

    assert text == "Patient: 81F"
    assert fake.calls == [path]
    assert statuses == ["Reading...", "OCR (Wait)..."]


@pytest.mark.parametrize("filename,fmt", [
    ("a.pdf", "pdf"),
    ("a.docx", "docx"),
    ("a.pptx", "pptx"),
    ("a.htm", "html"),
    ("a.html", "html"),
    ("a.txt", "txt"),
    ("a.png", "image"),
])
def test_routes_by_extension(tmp_path, filename, fmt):
    path = tmp_path / filename
    path.write_bytes(b"x")
    fakes = {name: FakeExtractor(name) for name in FileHandler.FORMATS}
    assert FileHandler(fakes).handle_file(path) == fmt
    assert fakes[fmt].calls == [path]


def test_word_html_doc_routed_to_html(tmp_path, sample_case):
    path = DocExporter().save(sample_case, tmp_path)
    assert path.suffix == ".doc"

    text = FileHandler().handle_file(path)
    assert "Geriatric Case Report" in text
    assert "Presents with 3 days of confusion." in text


def test_binary_doc_routed_to_docx(tmp_path):
    path = tmp_path / "legacy.doc"
    path.write_bytes(b"\xd0\xcf\x11\xe0 binary word")
    fakes = {"docx": FakeExtractor("docx text"), "html": FakeExtractor("html text")}
    assert FileHandler(fakes).handle_file(path) == "docx text"


def test_extractor_failure_calls_on_error_and_reraises(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"%PDF-broken")
    failure = TextExtractionError("boom", file_type="pdf")
    errors, successes = [], []

    with pytest.raises(TextExtractionError):
        FileHandler({"pdf": FakeExtractor(error=failure)}).handle_file(
            path, on_success=successes.append, on_error=errors.append
        )

    assert errors == [failure]
    assert successes == []


def test_module_level_handle_file(txt_file):
    assert extract_clinical_data(handle_file(txt_file)).age_sex == "85F"


# ----------------------------------------------------------------------------
# Extractors on real files
# ----------------------------------------------------------------------------

def test_plain_text_with_bom(tmp_path):
    path = tmp_path / "bom.txt"
    path.write_bytes("\ufeffHPI: fall".encode("utf-8"))
    assert FileHandler().handle_file(path) == "HPI: fall"


def test_html_extraction(html_file):
    text = FileHandler().handle_file(html_file)
    assert text == "Patient: 72 M\nHPI: Fell at home.\nMeds: Aspirin 81mg"

    record = extract_clinical_data(text)
    assert record.age_sex == "72 M"
    assert record.hpi == "Fell at home."
    assert record.meds == "Aspirin 81mg"


def test_extract_from_html_entities_and_breaks():
    assert extract_from_html("Na &lt; 130<br>K 4.1") == "Na < 130\nK 4.1"
    assert extract_from_html(None) == ""


def test_docx_extraction(docx_file):
    text = DocxTextExtractor().extract(docx_file)
    assert "Patient: 90 female" in text
    assert "Donepezil | 5mg daily" in text
    assert extract_clinical_data(text).age_sex == "90 female"


def test_docx_invalid_file(tmp_path):
    path = tmp_path / "fake.docx"
    path.write_text("not a zip")
    with pytest.raises(TextExtractionError) as exc:
        DocxTextExtractor().extract(path)
    assert exc.value.file_type == "docx"


def test_pptx_extraction(pptx_file):
    text = PptxTextExtractor().extract(pptx_file)
    assert text == "Patient: 78M\n\nHPI: Recurrent falls"


def test_pptx_invalid_file(tmp_path):
    path = tmp_path / "fake.pptx"
    path.write_text("not a zip")
    with pytest.raises(TextExtractionError):
        FileHandler().handle_file(path)


def test_pdf_extraction(pdf_file):
    extractor = PDFTextExtractor()
    result = extractor.extract_detailed(pdf_file)

    assert result.method == "pypdfium2"
    assert result.page_count == 1
    assert "88F" in result.text
    assert "Weight loss" in result.text
    assert result.errors == []


def test_pdf_flags_sparse_pages(pdf_file):
    result = PDFTextExtractor(min_chars_per_page=10_000).extract_detailed(pdf_file)
    assert result.pages_needing_ocr == [0]
    assert any("may be scanned" in w for w in result.warnings)


def test_pdf_all_methods_fail(tmp_path):
    path = tmp_path / "junk.pdf"
    path.write_bytes(b"this is not a pdf")
    with pytest.raises(TextExtractionError) as exc:
        PDFTextExtractor().extract(path)
    assert exc.value.file_type == "pdf"
    assert "All PDF extraction methods failed" in str(exc.value)


def test_ocr_extraction(png_file):
    with patch("pytesseract.image_to_string", return_value="Patient: 79F\nHPI: Syncope") as ocr:
        text = FileHandler().handle_file(png_file)

    assert text == "Patient: 79F\nHPI: Syncope"
    assert ocr.call_args.kwargs["lang"] == "eng"


def test_ocr_failure_wrapped(png_file):
    with patch("pytesseract.image_to_string", side_effect=RuntimeError("tesseract missing")):
        with pytest.raises(TextExtractionError) as exc:
            OCRExtractor().extract(png_file)
    assert exc.value.file_type == "image"


def test_ocr_unreadable_image(tmp_path):
    path = tmp_path / "bad.png"
    path.write_bytes(b"garbage")
    with pytest.raises(TextExtractionError):
        OCRExtractor().extract(path)


def test_load_image_downscales(tmp_path):
    from PIL import Image

    path = tmp_path / "big.png"
    Image.new("L", (4000, 1000)).save(path)

    image = load_image_for_ocr(path, max_dimension=2000)
    assert image.size == (2000, 500)
    assert image.mode == "RGB"
