from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional, Tuple

import requests

from feedback_portal.utils.logging import get_logger

from .config import AppConfig, get_config
from .errors import MalformedResponseError, TransportError
from .models import DecodedPayload, SelectedFile

LOGGER = get_logger(__name__)

ErrorExtractor = Callable[[int, str], Optional[str]]


def _load_json_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        payload = json.loads(text)
    except (TypeError, ValueError):
        return None
    return payload if isinstance(payload, dict) else None


def _json_field_extractor(field_name: str) -> ErrorExtractor:
    def extract(status_code: int, text: str) -> Optional[str]:
        payload = _load_json_object(text)
        if payload is None:
            return None
        value = payload.get(field_name)
        if value is None:
            return None
        message = str(value).strip()
        return message or None

    extract.__name__ = f"extract_{field_name}_field"
    return extract


def _raw_text(status_code: int, text: str) -> Optional[str]:
    return text if text and text.strip() else None


def _generic_status(status_code: int, text: str) -> Optional[str]:
    return f"Upload failed with status: {status_code}"


# Tried in order; the first extractor that yields a message wins.
ERROR_MESSAGE_EXTRACTORS: Tuple[ErrorExtractor, ...] = (
    _json_field_extractor("error"),
    _json_field_extractor("detail"),
    _raw_text,
    _generic_status,
)


def extract_error_message(status_code: int, text: str) -> str:
    """Best-effort user-facing message for a failed upload response."""
    for extractor in ERROR_MESSAGE_EXTRACTORS:
        message = extractor(status_code, text)
        if message:
            return message
    return f"Upload failed with status: {status_code}"


def upload_feedback_csv(
    file: SelectedFile,
    captcha: str,
    *,
    config: Optional[AppConfig] = None,
) -> str:
    """POST the CSV and CAPTCHA answer to the analysis service and return the body text.

    Raises:
        TransportError: When the service is unreachable or answers with a non-2xx status.
    """
    config = config or get_config()
    url = config.upload_url
    files = {"file": (file.name, file.content, file.mime_type or "text/csv")}
    data = {"captcha": captcha}

    LOGGER.info("Uploading %s (%d bytes) to %s", file.name, file.size, url)
    try:
        response = requests.post(url, files=files, data=data, timeout=config.request_timeout)
    except requests.exceptions.RequestException as exc:
        LOGGER.error("Upload to %s failed before a response arrived: %s", url, exc)
        raise TransportError(f"Could not reach the analysis service: {exc}", cause=exc) from exc

    body = response.text or ""
    if not 200 <= response.status_code < 300:
        message = extract_error_message(response.status_code, body)
        LOGGER.warning("Upload rejected with status %s: %s", response.status_code, message)
        raise TransportError(message, status_code=response.status_code)

    return body


def _wrapped_text(envelope: Dict[str, Any], raw: str) -> str:
    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponseError(raw, reason=f"incomplete candidates envelope: {exc!r}") from exc
    if not isinstance(text, str):
        raise MalformedResponseError(raw, reason="candidates text is not a string")
    return text


def decode_payload(text: str) -> DecodedPayload:
    """Decode a success body into analytics.

    Two schemas are recognised: a generative-model envelope
    (``candidates[0].content.parts[0].text`` holding a JSON document) and the
    analytics document itself. A body that claims to be an envelope but cannot
    be unwrapped is rejected rather than treated as the direct schema.

    Raises:
        MalformedResponseError: When either JSON layer fails to decode.
    """
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(text, reason=f"invalid JSON body: {exc}") from exc

    if isinstance(parsed, dict) and "candidates" in parsed:
        inner_text = _wrapped_text(parsed, text)
        try:
            inner = json.loads(inner_text)
        except ValueError as exc:
            raise MalformedResponseError(text, reason=f"invalid JSON in candidates text: {exc}") from exc
        if inner is None:
            raise MalformedResponseError(text, reason="candidates text decoded to null")
        return DecodedPayload(kind="wrapped", analytics=inner)

    if parsed is None:
        raise MalformedResponseError(text, reason="body decoded to null")
    return DecodedPayload(kind="direct", analytics=parsed)


def normalize_payload(text: str) -> Any:
    """Return the canonical analytics object carried by a success body."""
    decoded = decode_payload(text)
    LOGGER.debug("Decoded analytics payload using the %s schema", decoded.kind)
    return decoded.analytics
