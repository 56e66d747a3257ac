"""CAPTCHA challenge strategies for the upload form."""

from __future__ import annotations

import hmac
from typing import Optional, Protocol, runtime_checkable

from .config import AppConfig, get_config


@runtime_checkable
class CaptchaValidator(Protocol):
    """Challenge/response gate consulted before any upload is sent."""

    @property
    def challenge(self) -> str:
        """Text shown to the user in the CAPTCHA box."""
        ...

    def verify(self, answer: str) -> bool:
        ...


class StaticCaptcha:
    """Fixed challenge whose answer comes from configuration.

    This only proves that a gate exists; it is not bot protection.
    """

    def __init__(self, answer: str) -> None:
        if not answer:
            raise ValueError("CAPTCHA answer must not be empty")
        self._answer = answer

    @property
    def challenge(self) -> str:
        return " ".join(self._answer)

    def verify(self, answer: str) -> bool:
        if answer is None:
            return False
        return hmac.compare_digest(answer.encode("utf-8"), self._answer.encode("utf-8"))


def get_captcha_validator(config: Optional[AppConfig] = None) -> CaptchaValidator:
    """Return the validator configured for this deployment."""
    config = config or get_config()
    return StaticCaptcha(config.captcha_answer)
