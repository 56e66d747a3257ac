from __future__ import annotations

from typing import Optional

import streamlit as st

from feedback_portal.core.captcha import CaptchaValidator
from feedback_portal.core.collector import select_file, set_captcha_input
from feedback_portal.core.models import SelectedFile, UploadState
from feedback_portal.core.workflow import Uploader, complete_submission, prepare_submission
from feedback_portal.ui import components
from feedback_portal.utils import state as app_state
from feedback_portal.utils.logging import get_logger

LOGGER = get_logger(__name__)


def render_upload_form(state: UploadState, validator: CaptchaValidator) -> UploadState:
    """Render the file picker and CAPTCHA input and fold their values into the state.

    While a submission is in flight the widgets are disabled and their values
    are not read, so edits cannot reach the request being sent.
    """
    col_file, col_captcha = st.columns(2)

    with col_file:
        uploaded = st.file_uploader(
            "Choose File",
            type=["csv"],
            key=app_state.file_widget_key(),
            disabled=state.is_submitting,
        )
        candidate = SelectedFile.from_upload(uploaded) if uploaded is not None else None

    with col_captcha:
        components.render_captcha_box(validator.challenge)
        captcha_text = st.text_input(
            "CAPTCHA",
            key=app_state.captcha_widget_key(),
            placeholder="Enter CAPTCHA",
            label_visibility="collapsed",
            disabled=state.is_submitting,
        )

    if state.is_submitting:
        components.render_file_label(state.file_label, container=col_file)
        return state

    if candidate != state.selected_file:
        state = select_file(state, candidate)
    if captcha_text != state.captcha_input:
        state = set_captcha_input(state, captcha_text)

    components.render_file_label(state.file_label, container=col_file)
    app_state.set_upload_state(state)
    return state


def render_actions(state: UploadState, validator: CaptchaValidator) -> UploadState:
    """Render the submit button and status message; start a submission when clicked."""
    label = components.LOADING_TEXT if state.is_submitting else "Upload & Analyze"
    _, col_button, _ = st.columns([2, 1, 2])
    with col_button:
        clicked = st.button(
            label,
            type="primary",
            disabled=state.is_submitting,
            use_container_width=True,
        )

    if clicked and not state.is_submitting:
        state, error = prepare_submission(state, validator=validator)
        app_state.set_upload_state(state)
        if error is None:
            app_state.trigger_rerun()

    components.render_status_message(state)
    return state


def run_pending_submission(state: UploadState, uploader: Optional[Uploader] = None) -> UploadState:
    """Perform the upload for a Submitting state under a spinner, then re-render."""
    with st.spinner(components.LOADING_TEXT):
        state, error = complete_submission(state, uploader=uploader)

    app_state.set_upload_state(state)
    if error is None:
        app_state.reset_form_widgets()
    else:
        LOGGER.info("Submission finished with error: %s", error.message)
    app_state.trigger_rerun()
    return state
