from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# Ensure the project root is available on sys.path for `feedback_portal.*` imports.
APP_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = APP_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from feedback_portal.core.captcha import get_captcha_validator
from feedback_portal.core.config import get_config
from feedback_portal.core.models import UploadState
from feedback_portal.ui import components
from feedback_portal.ui.controls import render_actions, render_upload_form, run_pending_submission
from feedback_portal.utils import state as app_state
from feedback_portal.utils.logging import get_logger


LOGGER = get_logger("feedback_portal.app")


def main() -> None:
    st.set_page_config(
        page_title="Student Feedback Analytics Portal",
        page_icon="📊",
        layout="wide",
    )

    config = get_config()
    validator = get_captcha_validator(config)
    state = app_state.get_upload_state()

    components.render_header()
    st.divider()

    with st.container(border=True):
        state = render_upload_form(state, validator)

    with st.container(border=True):
        state = render_actions(state, validator)

    def send_pending_upload(pending: UploadState) -> None:
        LOGGER.info("Sending %s to %s", pending.file_label, config.upload_url)
        run_pending_submission(pending)

    with st.container(border=True):
        components.render_results_panel(state, on_loading=send_pending_upload)


if __name__ == "__main__":
    main()
