from __future__ import annotations

import streamlit as st

from feedback_portal.core.models import UploadState

UPLOAD_STATE_KEY = "upload_state"
FORM_NONCE_KEY = "upload_form_nonce"


def trigger_rerun() -> None:
    """Re-run the page script so the latest state is rendered."""
    st.rerun()


def get_upload_state() -> UploadState:
    """Return the form state, creating an idle one on first render."""
    state = st.session_state.get(UPLOAD_STATE_KEY)
    if not isinstance(state, UploadState):
        state = UploadState()
        st.session_state[UPLOAD_STATE_KEY] = state
    return state


def set_upload_state(state: UploadState) -> None:
    st.session_state[UPLOAD_STATE_KEY] = state


def _form_nonce() -> int:
    return int(st.session_state.setdefault(FORM_NONCE_KEY, 0))


def file_widget_key() -> str:
    return f"feedback_csv_{_form_nonce()}"


def captcha_widget_key() -> str:
    return f"captcha_input_{_form_nonce()}"


def reset_form_widgets() -> None:
    """Give the file and CAPTCHA widgets fresh keys so they render empty."""
    st.session_state[FORM_NONCE_KEY] = _form_nonce() + 1
