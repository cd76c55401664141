# ============================================================================
# api/main.py
# ============================================================================
"""
FastAPI Backend for the Geriatric Case Helper

Runs on port 8000 (Streamlit runs on 8501).
Endpoints are synchronous; FastAPI runs them in its threadpool so the
blocking extractors (PDF, OCR) never stall the event loop.
"""

import tempfile
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import quote

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

from geriatric_case import __version__
from geriatric_case.core import (
    CaseExport,
    PromptRequest,
    extract_clinical_data,
    generate_prompt,
    validate_prompt_data,
)
from geriatric_case.exporters import DocExporter, PPTExporter
from geriatric_case.extractors import FileHandler, get_file_extension, is_extension_supported
from geriatric_case.utils import (
    DocumentImportError,
    ExportError,
    UnsupportedFileTypeError,
    get_logger,
    setup_logging,
)
from geriatric_case.utils.file_utils import export_filename

logger = get_logger(__name__)

PPTX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

app = FastAPI(
    title="Geriatric Case Helper API",
    description="Clinical field extraction, AI review prompts and case export",
    version=__version__,
)

# CORS for the local UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:8501",
        "http://127.0.0.1:8501",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Models
# ============================================================================

class TextRequest(BaseModel):
    text: str = ""


class PromptBody(BaseModel):
    """Prompt fields; camelCase keys from the browser form are accepted."""
    model_config = ConfigDict(populate_by_name=True)

    age_sex: Optional[str] = Field(default=None, alias="ageSex")
    hpi: Optional[str] = None
    meds: Optional[str] = None
    raw_text: Optional[str] = Field(default=None, alias="rawText")
    template: Optional[str] = None
    allow_bypass: bool = Field(default=False, alias="allowBypass")

    def to_request(self) -> PromptRequest:
        return PromptRequest(
            age_sex=self.age_sex,
            hpi=self.hpi,
            meds=self.meds,
            raw_text=self.raw_text,
            template=self.template,
        )


class ExportBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    age_sex: str = Field(default="", alias="ageSex")
    initials: str = ""
    hpi: str = ""
    meds: str = ""
    ai_response: str = Field(default="", alias="aiResponse")

    def to_case(self) -> CaseExport:
        return CaseExport(
            age_sex=self.age_sex,
            initials=self.initials,
            hpi=self.hpi,
            meds=self.meds,
            ai_response=self.ai_response,
        )


def _attachment(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/api/health")
def health():
    """Health check for monitoring."""
    return {"status": "healthy", "version": __version__}


@app.post("/api/import")
def import_document(file: UploadFile = File(...)):
    """
    Upload a clinical document and extract its text and case fields.

    Returns 415 for unsupported file types and 422 when the text cannot
    be extracted.
    """
    filename = file.filename or ""
    extension = get_file_extension(filename)
    if not is_extension_supported(extension):
        raise HTTPException(status_code=415, detail=str(UnsupportedFileTypeError(extension)))

    with tempfile.TemporaryDirectory() as tmp_dir:
        tmp_path = Path(tmp_dir) / f"upload.{extension}"
        tmp_path.write_bytes(file.file.read())

        try:
            text = FileHandler().handle_file(tmp_path)
        except DocumentImportError as e:
            logger.warning(f"Import of {filename} failed: {e}")
            raise HTTPException(status_code=422, detail=str(e))

    record = extract_clinical_data(text)
    logger.info(f"Imported {filename}: {len(text)} chars")

    return {"filename": filename, "text": text, "record": record.to_dict()}


@app.post("/api/extract")
def extract(request: TextRequest) -> Dict[str, Any]:
    """Extract case fields from pasted text."""
    return extract_clinical_data(request.text).to_dict()


@app.post("/api/validate")
def validate(body: PromptBody) -> Dict[str, Any]:
    """Report which required prompt fields are missing."""
    return validate_prompt_data(body.to_request(), allow_bypass=body.allow_bypass).to_dict()


@app.post("/api/prompt")
def prompt(body: PromptBody):
    """
    Render the reviewer prompt.

    Invalid input returns 422 with the validation result as detail.
    """
    request = body.to_request()
    validation = validate_prompt_data(request, allow_bypass=body.allow_bypass)
    if not validation.is_valid:
        raise HTTPException(status_code=422, detail=validation.to_dict())

    return {
        "prompt": generate_prompt(request),
        "using_raw_text": validation.using_raw_text,
    }


@app.post("/api/export/doc")
def export_doc(body: ExportBody):
    """Download the case as a Word-compatible .doc."""
    export = DocExporter().export(body.to_case())
    return _attachment(export.content, export.mime_type, export.filename)


@app.post("/api/export/pptx")
def export_pptx(body: ExportBody):
    """Download the case as a PowerPoint deck."""
    case = body.to_case()
    try:
        content = PPTExporter().to_bytes(case)
    except ExportError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return _attachment(content, PPTX_MIME_TYPE, export_filename(case.initials, "pptx"))


if __name__ == "__main__":
    import uvicorn
    setup_logging()
    uvicorn.run(app, host="0.0.0.0", port=8000)
