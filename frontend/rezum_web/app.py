"""Streamlit frontend: upload a resume PDF, then show its ATS analysis.

Run: streamlit run frontend/rezum_web/app.py

The results view is selected by the ``id`` query parameter, so a results
page can be reloaded or shared while the backend still holds the file.
"""

import base64

import httpx
import streamlit as st

from rezum_web.api import MAX_UPLOAD_SIZE, BackendError, RezumApi, preview_bytes, score_band

st.set_page_config(page_title="Rezum - ATS Resume Checker", page_icon="📄", layout="wide")


@st.cache_resource
def get_api() -> RezumApi:
    return RezumApi()


def _go_home() -> None:
    st.query_params.clear()
    st.session_state.pop("analysis", None)


def render_upload_page() -> None:
    st.title("Rezum")
    st.markdown("Upload your resume and get instant ATS feedback with concrete improvements.")

    uploaded = st.file_uploader("Drop your resume here (PDF)", type=["pdf"])
    if uploaded is None:
        return

    data = uploaded.getvalue()
    if len(data) >= MAX_UPLOAD_SIZE:
        st.error("File too large. Maximum size is 10MB.")
        return

    st.caption(f"{uploaded.name} · {len(data) / 1024:.1f} KB")
    if not st.button("Analyze resume", type="primary"):
        return

    with st.spinner("Uploading..."):
        try:
            result = get_api().upload_file(uploaded.name, data, uploaded.type or "application/pdf")
        except BackendError as e:
            st.error(f"Upload failed: {e.detail}")
            return
        except httpx.HTTPError as e:
            st.error(f"Upload failed: {e}")
            return

    st.session_state["uploaded_file"] = {"file_id": result["fileId"], "name": uploaded.name, "data": data}
    st.query_params["id"] = result["fileId"]
    st.rerun()


def _render_pdf_preview(data: bytes) -> None:
    b64 = base64.b64encode(data).decode("ascii")
    st.markdown(
        f'<embed src="data:application/pdf;base64,{b64}" type="application/pdf" '
        f'width="100%" height="700px" />',
        unsafe_allow_html=True,
    )


def _render_score(score: int | None) -> None:
    st.subheader("Your ATS Score")
    st.caption("How well your resume performs with Applicant Tracking Systems")
    band = score_band(score)
    if band is None:
        st.info("The analysis did not include a score.")
        return
    label, color = band
    st.markdown(f"## :{color}[{score}%]")
    st.markdown(f":{color}[**{label}**]")


def render_results_page(file_id: str) -> None:
    st.button("← Back to Home", on_click=_go_home)
    st.title("Resume Analysis")
    st.caption(f"File ID: {file_id}")

    analysis = st.session_state.get("analysis")
    if analysis is None or analysis.get("fileId") != file_id:
        with st.spinner("Analyzing your resume..."):
            try:
                analysis = get_api().analyze(file_id)
            except BackendError as e:
                st.error(e.detail)
                if e.status_code == 404:
                    st.caption("Scanned or image-only PDFs cannot be processed. "
                               "Please upload a PDF with selectable text.")
                return
            except httpx.HTTPError as e:
                st.error(f"Failed to fetch analysis: {e}")
                return
        st.session_state["analysis"] = analysis

    preview_col, analysis_col = st.columns(2)

    with preview_col:
        st.subheader("Resume Preview")
        pdf = preview_bytes(get_api(), file_id, st.session_state.get("uploaded_file"))
        if pdf:
            _render_pdf_preview(pdf)
        else:
            st.info("The original file is no longer available for preview.")

    with analysis_col:
        _render_score(analysis.get("atsScore"))
        st.divider()
        st.subheader("Analysis")
        st.markdown(analysis.get("analysis", ""))
        with st.expander("Extracted text"):
            st.text(analysis.get("extractedText", ""))


file_id = st.query_params.get("id")
if file_id:
    render_results_page(file_id)
else:
    render_upload_page()
