import time
from datetime import datetime
from pathlib import Path

import pandas as pd
import streamlit as st

# Import core modules
from drug_insight import config
from drug_insight.analyzer import analyze, validate_input
from drug_insight.demo import SAMPLE_ARTICLES, generate_demo_result, get_sample_article
from drug_insight.exceptions import EmptyInputError, ExtractionError
from drug_insight.interactions import get_interaction_summary
from drug_insight.reference_data import get_default_tables
from drug_insight.severity import (
    get_frequency_color,
    get_severity_color,
    get_severity_icon,
    group_side_effects_by_frequency,
    sort_by_severity,
)
from drug_insight.utils import format_confidence, format_results_text, generate_pdf_report, save_results_csv
from ui import ANALYSIS_STEPS, CSS_PATH, FALLBACK_CSS
from ui.uploads import process_upload

config.setup_logging()

# Page configuration
st.set_page_config(
    page_title=config.APP_NAME,
    page_icon="💊",
    layout="wide",
    initial_sidebar_state="expanded"
)


# Load custom CSS
@st.cache_data
def load_css():
    css_file = Path(CSS_PATH)
    if css_file.exists():
        return css_file.read_text()
    return FALLBACK_CSS


# Initialize session state
if 'analysis_result' not in st.session_state:
    st.session_state.analysis_result = None
if 'article' not in st.session_state:
    st.session_state.article = ""
if 'uploaded_file_name' not in st.session_state:
    st.session_state.uploaded_file_name = None
if 'processed_upload' not in st.session_state:
    st.session_state.processed_upload = None


def main():
    st.markdown(f"<style>{load_css()}</style>", unsafe_allow_html=True)

    # Sidebar navigation
    with st.sidebar:
        st.markdown(f"## 💊 {config.APP_NAME}")
        st.markdown("---")

        page = st.selectbox(
            "Navigate",
            ["🏠 Home", "🔍 Analyze", "⚠️ Interactions", "🩺 Side Effects", "📄 Export"]
        )

        st.markdown("---")
        st.markdown("### ⚠️ Medical Disclaimer")
        st.caption("Findings come from keyword matching against a small reference table. "
                   "This tool is for educational purposes only. Always consult healthcare professionals.")

    # Page routing
    if page == "🏠 Home":
        show_home_page()
    elif page == "🔍 Analyze":
        show_analyze_page()
    elif page == "⚠️ Interactions":
        show_interactions_page()
    elif page == "🩺 Side Effects":
        show_side_effects_page()
    elif page == "📄 Export":
        show_export_page()


def show_home_page():
    st.markdown(f"""
    <div class="hero-section">
        <h1>{config.APP_NAME}</h1>
        <p>Upload PDF medical articles or paste text to find drug mentions, interactions and side effects</p>
    </div>
    """, unsafe_allow_html=True)

    tables = get_default_tables()
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Known Drugs", len(tables.drugs))
    with col2:
        st.metric("Interaction Rules", len(tables.interactions))
    with col3:
        st.metric("Side-Effect Rules", len(tables.side_effects))

    with st.expander("📚 Reference drugs"):
        st.dataframe(
            pd.DataFrame(
                [
                    {"Drug": entry.name, "Aliases": ", ".join(entry.aliases), "Category": entry.category}
                    for entry in tables.drugs
                ]
            ),
            hide_index=True,
            use_container_width=True,
        )


def handle_file_upload(uploaded_file):
    """Extract text from an upload into the article box"""
    try:
        with st.spinner(f"Extracting text from {uploaded_file.name}..."):
            loaded = process_upload(uploaded_file, st.session_state)
    except ExtractionError as e:
        st.toast(f"Upload failed: {e}", icon="❌")
        st.error(f"Upload failed: {e}")
        return

    if loaded:
        st.toast(f"Loaded {uploaded_file.name} successfully", icon="📄")


def show_analyze_page():
    st.markdown("## 🔍 Medical Article Analysis")

    col1, col2 = st.columns([2, 1])

    with col2:
        st.markdown("### Upload")
        uploaded_file = st.file_uploader(
            "PDF, text or scanned image",
            type=['pdf', 'txt', 'md', 'png', 'jpg', 'jpeg'],
            help=f"Files up to {config.MAX_FILE_SIZE_MB:g} MB"
        )
        if uploaded_file is not None:
            handle_file_upload(uploaded_file)

        st.markdown("### Samples")
        sample_title = st.selectbox("Sample article", ["(choose)"] + sorted(SAMPLE_ARTICLES))
        if st.button("Load sample") and sample_title != "(choose)":
            st.session_state.article = get_sample_article(sample_title)
            st.session_state.uploaded_file_name = None

        demo_mode = st.checkbox(
            "Demo mode (synthetic results)",
            help="Shows random findings from the reference tables instead of analyzing the text"
        )

    with col1:
        st.text_area(
            "Medical article",
            key="article",
            height=320,
            placeholder="Paste your medical article, case study, or clinical notes here..."
        )
        if st.session_state.uploaded_file_name:
            st.caption(f"📎 {st.session_state.uploaded_file_name}")

        if st.button("✨ Analyze Article", type="primary"):
            run_analysis(st.session_state.article, demo_mode)

    if st.session_state.analysis_result is not None:
        show_analysis_results()


def run_analysis(article: str, demo_mode: bool = False):
    """Run the pipeline with staged progress milestones"""
    try:
        validate_input(article)
    except EmptyInputError as e:
        st.toast("No Content", icon="⚠️")
        st.error(str(e))
        return

    progress_bar = st.progress(0, text="Processing medical content...")
    for message, progress in ANALYSIS_STEPS:
        progress_bar.progress(progress, text=message)
        time.sleep(config.ANALYSIS_STEP_DELAY)

    if demo_mode:
        result = generate_demo_result(get_default_tables())
    else:
        result = analyze(article, get_default_tables())

    progress_bar.empty()
    st.session_state.analysis_result = result
    st.toast(
        f"Analysis Complete: found {result.summary.total_drugs} drugs, "
        f"{result.summary.critical_interactions} critical interactions",
        icon="✅"
    )


def show_analysis_results():
    """Show analysis results"""
    result = st.session_state.analysis_result

    st.markdown("---")
    if result.demo:
        st.markdown("<div class='demo-banner'>DEMO MODE: synthetic results, not derived from the text</div>",
                    unsafe_allow_html=True)

    if result.is_empty():
        st.info("No known drugs, interactions or side effects were found in this text.")
        return

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Drugs Found", result.summary.total_drugs)
    with col2:
        st.metric("Critical", result.summary.critical_interactions)
    with col3:
        st.metric("Major Effects", result.summary.major_side_effects)

    st.markdown(f"### 💊 Drugs Identified ({len(result.drugs)})")
    if result.drugs:
        st.markdown(" ".join(
            f"`{drug.name} ({format_confidence(drug.confidence, 0)})`" for drug in result.drugs
        ))
    else:
        st.info("No known drugs were mentioned in the text.")

    st.markdown(f"### ⚠️ Drug Interactions ({len(result.interactions)})")
    render_interactions(result.interactions)

    st.markdown(f"### 🩺 Side Effects ({len(result.side_effects)})")
    render_side_effects(result.side_effects)


def render_interactions(interactions):
    if not interactions:
        st.success("✅ No drug interactions detected!")
        return

    for interaction in interactions:
        color = get_severity_color(interaction.severity)
        st.markdown(f"""
        <div class="finding-card" style="--accent: {color};">
            {get_severity_icon(interaction.severity)} {interaction.description}<br/>
            <small><b style="color: {color};">{interaction.severity.upper()}</b>
            • {format_confidence(interaction.confidence, 0)} confidence</small>
        </div>
        """, unsafe_allow_html=True)


def render_side_effects(side_effects):
    if not side_effects:
        st.info("No side effects found.")
        return

    for item in side_effects:
        color = get_frequency_color(item.frequency)
        st.markdown(f"""
        <div class="finding-card" style="--accent: {color};">
            <b>{item.effect}</b>
            <small>• {item.frequency} • {format_confidence(item.confidence, 0)}</small>
        </div>
        """, unsafe_allow_html=True)


def show_interactions_page():
    """Show drug interactions page"""
    st.markdown("## ⚠️ Drug Interactions")

    result = st.session_state.analysis_result
    if result is None:
        st.info("No analysis results available. Please analyze an article first.")
        return

    summary = get_interaction_summary(result.interactions)
    if summary['high_severity'] > 0:
        st.error(f"⚠️ {summary['total']} interactions found • {summary['high_severity']} high severity")
    elif summary['total'] > 0:
        st.warning(f"⚠️ {summary['total']} interactions found • Low to medium severity")

    render_interactions(sort_by_severity(result.interactions))


def show_side_effects_page():
    st.markdown("## 🩺 Side Effects")

    result = st.session_state.analysis_result
    if result is None:
        st.info("No analysis results available. Please analyze an article first.")
        return

    if not result.side_effects:
        st.info("No side effects found.")
        return

    for frequency, items in group_side_effects_by_frequency(result.side_effects).items():
        if items:
            st.markdown(f"#### {frequency}")
            render_side_effects(items)


def show_export_page():
    """Show export page"""
    st.markdown("## 📄 Export Results")

    result = st.session_state.analysis_result
    if result is None:
        st.info("No analysis results available. Please analyze an article first.")
        return

    stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    text_export = format_results_text(result)

    st.markdown("### 📋 Copy Results")
    st.caption("Use the copy icon in the corner of the box")
    st.code(text_export, language=None)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button(
            label="💾 Save Text",
            data=text_export,
            file_name=f"drug_insight_{stamp}.txt",
            mime="text/plain"
        )
    with col2:
        st.download_button(
            label="💾 Save CSV",
            data=save_results_csv(result),
            file_name=f"drug_insight_{stamp}.csv",
            mime="text/csv"
        )
    with col3:
        if st.button("📄 Generate PDF"):
            with st.spinner("Generating PDF report..."):
                try:
                    pdf_data = generate_pdf_report(result)
                except Exception as e:
                    st.error(f"Error generating PDF: {e}")
                    return
            st.download_button(
                label="💾 Save PDF Report",
                data=pdf_data,
                file_name=f"drug_insight_report_{stamp}.pdf",
                mime="application/pdf"
            )


if __name__ == "__main__":
    main()
