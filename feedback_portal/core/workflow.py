"""Submission state machine for the upload form.

``submit`` runs a whole attempt in one call. The Streamlit page splits it
into ``prepare_submission`` and ``complete_submission`` so the Submitting
phase is rendered (button disabled, spinner shown) while the upload runs.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional, Tuple

from feedback_portal.utils.logging import get_logger

from .api import normalize_payload, upload_feedback_csv
from .captcha import CaptchaValidator, get_captcha_validator
from .collector import validate_for_submit
from .errors import InvalidCaptchaError, MalformedResponseError, MissingFileError, UploadError
from .models import Phase, SelectedFile, UploadState, ValidationResult

LOGGER = get_logger(__name__)

SUCCESS_MESSAGE = "Analysis complete!"

Uploader = Callable[[SelectedFile, str], str]
SubmitOutcome = Tuple[UploadState, Optional[UploadError]]


def validation_error(result: ValidationResult) -> Optional[UploadError]:
    if result is ValidationResult.MISSING_FILE:
        return MissingFileError()
    if result is ValidationResult.INVALID_CAPTCHA:
        return InvalidCaptchaError()
    return None


def begin_submission(state: UploadState) -> UploadState:
    """Move to Submitting, clearing the previous message and analytics."""
    return replace(state, phase=Phase.SUBMITTING, status_message=None, analytics=None)


def fail_submission(state: UploadState, error: UploadError) -> UploadState:
    """Move to Failed. The form inputs are kept so the user can correct and resubmit."""
    return replace(state, phase=Phase.FAILED, status_message=error.message, analytics=None)


def succeed_submission(analytics: object) -> UploadState:
    """Store the analytics and reset the form inputs for the next upload."""
    return UploadState(
        phase=Phase.SUCCEEDED,
        status_message=SUCCESS_MESSAGE,
        analytics=analytics,
    )


def complete_submission(state: UploadState, *, uploader: Optional[Uploader] = None) -> SubmitOutcome:
    """Perform the upload for a state already in the Submitting phase."""
    if state.phase is not Phase.SUBMITTING:
        raise ValueError(f"cannot complete a submission from phase {state.phase.value}")
    if state.selected_file is None:
        error: UploadError = MissingFileError()
        return fail_submission(state, error), error

    uploader = uploader or upload_feedback_csv
    try:
        body = uploader(state.selected_file, state.captcha_input)
        analytics = normalize_payload(body)
    except MalformedResponseError as exc:
        LOGGER.error("Failed to parse analytics response (%s)", exc.reason)
        LOGGER.debug("Raw response was: %s", exc.raw_payload)
        return fail_submission(state, exc), exc
    except UploadError as exc:
        LOGGER.error("Upload error: %s", exc.message)
        return fail_submission(state, exc), exc

    LOGGER.info("Analysis received for %s", state.selected_file.name)
    return succeed_submission(analytics), None


def prepare_submission(state: UploadState, *, validator: Optional[CaptchaValidator] = None) -> SubmitOutcome:
    """Validate the form and, if it passes, move to the Submitting phase.

    Validation failures short-circuit to Failed before any network call.
    """
    if state.is_submitting:
        raise ValueError("a submission is already in flight for this form")

    validator = validator or get_captcha_validator()
    error = validation_error(validate_for_submit(state, validator))
    if error is not None:
        LOGGER.info("Submission rejected before upload: %s", error.message)
        return fail_submission(state, error), error
    return begin_submission(state), None


def submit(
    state: UploadState,
    *,
    validator: Optional[CaptchaValidator] = None,
    uploader: Optional[Uploader] = None,
) -> SubmitOutcome:
    """Run one submission attempt end to end.

    Validation failures short-circuit before any network call. Every failure
    leaves the state in the Failed phase with no analytics; nothing is raised.
    """
    pending, error = prepare_submission(state, validator=validator)
    if error is not None:
        return pending, error
    return complete_submission(pending, uploader=uploader)
