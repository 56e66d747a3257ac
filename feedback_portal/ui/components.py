from __future__ import annotations

import html
from typing import Callable, List, Optional

import streamlit as st
from streamlit.delta_generator import DeltaGenerator

from feedback_portal.core.models import AnalyticsResult, RenderBranch, ThemeItem, UploadState
from feedback_portal.core.processing import (
    coerce_analytics,
    format_slice_label,
    select_render_branch,
    sentiment_percentages,
    to_chart_series,
    to_theme_list,
)
from feedback_portal.ui.charts import create_sentiment_pie_chart, create_theme_mentions_chart

LOADING_TEXT = "Analyzing data..."
NO_FILE_TEXT = "No file selected..."


def render_header() -> None:
    st.markdown(
        "<h1 style=\"text-align:center;\">Student Feedback Analytics Portal</h1>",
        unsafe_allow_html=True,
    )


def render_file_label(label: str, container: Optional[DeltaGenerator] = None) -> None:
    target = container or st
    target.caption(label or NO_FILE_TEXT)


def render_captcha_box(challenge: str, container: Optional[DeltaGenerator] = None) -> None:
    """Show the CAPTCHA challenge in a bordered, unselectable box."""
    target = container or st
    target.markdown(
        (
            "<div style=\"border:1px dashed #9ca3af;border-radius:0.5rem;padding:0.6rem 1rem;"
            "font-family:monospace;font-size:1.4rem;letter-spacing:0.3em;text-align:center;"
            "user-select:none;background:#f9fafb;\">"
            f"{html.escape(challenge)}"
            "</div>"
        ),
        unsafe_allow_html=True,
    )


def render_status_message(state: UploadState) -> None:
    """Success styling when analytics are present, error styling otherwise."""
    if not state.status_message:
        return
    if state.analytics is not None:
        st.success(state.status_message)
    else:
        st.error(state.status_message)


def render_loading() -> None:
    st.info(f"⏳ {LOADING_TEXT}")


def render_placeholder() -> None:
    st.markdown(
        """
        <div style="text-align:center;color:#6b7280;padding:2.5rem;">
            <h2>Welcome!</h2>
            <p>Upload a CSV file to begin your analysis.</p>
            <p>Results will be displayed here.</p>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_unexpected_format() -> None:
    st.error("**Error**\n\nThe analytics data is in an unexpected format.")


def render_theme_list(items: List[ThemeItem]) -> None:
    if not items:
        st.info("No key themes were reported for this file.")
        return

    for item in items:
        theme = item.theme
        with st.container(border=True, key=f"theme_{item.key}"):
            col_title, col_badge = st.columns([4, 1])
            col_title.markdown(f"**{html.escape(theme.theme)}**")
            col_badge.markdown(f"`{theme.mentions} Mentions`")
            if theme.example_quote:
                st.markdown(f"> *\"{html.escape(theme.example_quote)}\"*")


def render_analytics(result: AnalyticsResult) -> None:
    """Sentiment chart with per-category shares, followed by the key themes."""
    series = to_chart_series(result)
    percentages = sentiment_percentages(series)

    st.subheader("Overall Sentiment")
    st.plotly_chart(create_sentiment_pie_chart(series), use_container_width=True, key="sentiment_pie_chart")
    columns = st.columns(len(series))
    for column, item in zip(columns, series):
        with column:
            st.metric(
                label=item.label,
                value=item.value,
                delta=format_slice_label("Share", percentages[item.label]),
                delta_color="off",
            )

    st.subheader("Key Themes")
    items = to_theme_list(result)
    if items:
        st.plotly_chart(create_theme_mentions_chart(items), use_container_width=True, key="theme_mentions_chart")
    render_theme_list(items)


def render_results_panel(
    state: UploadState,
    on_loading: Optional[Callable[[UploadState], None]] = None,
) -> RenderBranch:
    """Render the view for the current state and return which branch was shown.

    While submitting, ``on_loading`` runs after the loading view is drawn; the
    page passes the pending upload here.
    """
    branch = select_render_branch(state)
    if branch is RenderBranch.LOADING:
        render_loading()
        if on_loading is not None:
            on_loading(state)
    elif branch is RenderBranch.EMPTY:
        render_placeholder()
    elif branch is RenderBranch.UNEXPECTED_FORMAT:
        render_unexpected_format()
    else:
        render_analytics(coerce_analytics(state.analytics))
    return branch
