#!/usr/bin/env python3
# ============================================================================
# ui/app.py
# ============================================================================
"""
Geriatric Case Helper - Streamlit UI

Upload a note, review the auto-filled fields, copy the AI prompt, paste
the AI response back and download the case as PowerPoint or Word.

Usage:
    streamlit run ui/app.py
"""

import tempfile
from pathlib import Path

import streamlit as st

from geriatric_case.core import generate_magic_prompt, smart_populate
from geriatric_case.exporters import DocExporter, PPTExporter
from geriatric_case.extractors import FileHandler, SUPPORTED_EXTENSIONS
from geriatric_case.utils import (
    GeriatricCaseError,
    format_medical_text,
    format_medication_list,
)
from geriatric_case.utils.file_utils import export_filename

# Form field ids, shared with generate_magic_prompt()
FIELDS = ('age_sex', 'hpi', 'meds', 'raw-text')

PPTX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"


def init_session_state():
    """Initialize session state variables."""
    for key in FIELDS + ('initials', 'ai_response'):
        if key not in st.session_state:
            st.session_state[key] = ''

    if 'prompt' not in st.session_state:
        st.session_state.prompt = ''

    if 'messages' not in st.session_state:
        st.session_state.messages = []


def on_upload():
    """Import the uploaded file and auto-fill the form."""
    uploaded = st.session_state.get('upload')
    if uploaded is None:
        return

    suffix = Path(uploaded.name).suffix
    with tempfile.TemporaryDirectory() as tmp_dir:
        path = Path(tmp_dir) / f"upload{suffix}"
        path.write_bytes(uploaded.getvalue())

        try:
            text = FileHandler().handle_file(path, on_status=st.toast, on_success=st.toast)
        except GeriatricCaseError as e:
            st.session_state.messages = [f"Import failed: {e}"]
            return

    st.session_state['raw-text'] = text

    def set_field(name: str, value: str):
        st.session_state[name] = value

    smart_populate(text, set_field)
    st.session_state.messages = []


def tidy_fields():
    """Re-flow the HPI and put one medication per line."""
    st.session_state.hpi = format_medical_text(st.session_state.hpi)
    st.session_state.meds = format_medication_list(st.session_state.meds)


def build_prompt(allow_bypass: bool):
    messages = []

    def deliver(prompt: str) -> bool:
        st.session_state.prompt = prompt
        return True

    generate_magic_prompt(
        get_value=lambda field_id: st.session_state.get(field_id, ''),
        notify=messages.append,
        deliver=deliver,
        allow_bypass=allow_bypass,
    )
    st.session_state.messages = messages


def current_case() -> dict:
    return {
        'age_sex': st.session_state.age_sex,
        'initials': st.session_state.initials,
        'hpi': st.session_state.hpi,
        'meds': st.session_state.meds,
        'ai_response': st.session_state.ai_response,
    }


def main():
    """Main application entry point."""
    st.set_page_config(
        page_title="Geriatric Case Helper",
        page_icon="🩺",
        layout="wide",
    )

    init_session_state()

    st.title("🩺 Geriatric Case Helper")

    extensions = [ext for group in SUPPORTED_EXTENSIONS.values() for ext in group]
    st.file_uploader("Clinical document", type=extensions, key='upload', on_change=on_upload)

    left, right = st.columns(2)

    with left:
        st.subheader("Case")
        st.text_input("Age / Sex", key='age_sex')
        st.text_input("Initials", key='initials')
        st.text_area("HPI", key='hpi', height=150)
        st.text_area("Meds / Labs", key='meds', height=150)
        st.button("Tidy fields", on_click=tidy_fields)

    with right:
        st.subheader("Raw text")
        st.text_area("Imported text", key='raw-text', height=380)

    allow_bypass = st.checkbox("Use raw text when no fields were found")
    if st.button("Generate prompt", type="primary"):
        build_prompt(allow_bypass)

    for message in st.session_state.messages:
        st.info(message)

    if st.session_state.prompt:
        st.code(st.session_state.prompt, language=None)

    st.subheader("AI response")
    st.text_area("Paste the AI response", key='ai_response', height=250)

    case = current_case()
    col_ppt, col_doc = st.columns(2)

    with col_ppt:
        try:
            deck = PPTExporter().to_bytes(case)
        except GeriatricCaseError as e:
            st.error(str(e))
        else:
            st.download_button(
                "Download PowerPoint",
                data=deck,
                file_name=export_filename(case['initials'], 'pptx'),
                mime=PPTX_MIME_TYPE,
            )

    with col_doc:
        doc = DocExporter().export(case)
        st.download_button(
            "Download Word",
            data=doc.content,
            file_name=doc.filename,
            mime=doc.mime_type,
        )


if __name__ == "__main__":
    main()
