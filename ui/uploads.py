"""
Upload handling shared by the Analyze page
"""

from drug_insight.exceptions import ExtractionError
from drug_insight.extraction import extract_text


def process_upload(uploaded_file, state) -> bool:
    """
    Extract a new upload into the article box state

    The uploader keeps its file across reruns, so an upload is only
    extracted until it succeeds once.

    Args:
        uploaded_file: Streamlit UploadedFile (name, type, file_id, getvalue)
        state: Session state mapping

    Returns:
        True when the article was replaced, False when the upload was already loaded

    Raises:
        ExtractionError: the file could not be turned into text
    """
    if uploaded_file.file_id == state.get("processed_upload"):
        return False

    try:
        text = extract_text(uploaded_file.getvalue(), uploaded_file.type, uploaded_file.name)
    except ExtractionError:
        state["uploaded_file_name"] = None
        raise

    state["processed_upload"] = uploaded_file.file_id
    state["article"] = text
    state["uploaded_file_name"] = uploaded_file.name
    return True
