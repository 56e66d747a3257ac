"""Input collection for the upload form.

Every function takes the current ``UploadState`` and returns a new one;
nothing here touches the network.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from .captcha import CaptchaValidator
from .models import SelectedFile, UploadState, ValidationResult


def select_file(state: UploadState, candidate: Optional[SelectedFile]) -> UploadState:
    """Record the picked file and drop any stale status message.

    Content type is not checked here; the picker limits the extension and
    the service has the final say.
    """
    if candidate is None:
        return clear_selection(state)
    return replace(state, selected_file=candidate, file_label=candidate.name, status_message=None)


def clear_selection(state: UploadState) -> UploadState:
    return replace(state, selected_file=None, file_label="")


def set_captcha_input(state: UploadState, text: str) -> UploadState:
    return replace(state, captcha_input=text or "")


def validate_for_submit(state: UploadState, validator: CaptchaValidator) -> ValidationResult:
    """Check the CAPTCHA answer, then that a file is selected.

    A wrong answer is reported as such whether or not a file is present.
    """
    if not validator.verify(state.captcha_input):
        return ValidationResult.INVALID_CAPTCHA
    if state.selected_file is None:
        return ValidationResult.MISSING_FILE
    return ValidationResult.OK
