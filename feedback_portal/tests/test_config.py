from __future__ import annotations

from feedback_portal.core.captcha import StaticCaptcha
from feedback_portal.core.config import AppConfig, get_config


def test_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("FEEDBACK_API_BASE_URL", "http://gateway:8080/")
    monkeypatch.setenv("FEEDBACK_UPLOAD_PATH", "api/data/upload")
    monkeypatch.setenv("FEEDBACK_REQUEST_TIMEOUT", "15")
    get_config.cache_clear()

    config = get_config()
    assert config.upload_url == "http://gateway:8080/api/data/upload"
    assert config.request_timeout == 15.0
    assert config.captcha_answer == "12345"


def test_invalid_timeout_falls_back_to_default(monkeypatch) -> None:
    monkeypatch.setenv("FEEDBACK_REQUEST_TIMEOUT", "soon")
    get_config.cache_clear()
    assert get_config().request_timeout == AppConfig().request_timeout


def test_blank_captcha_answer_keeps_default(monkeypatch) -> None:
    monkeypatch.setenv("FEEDBACK_CAPTCHA_ANSWER", "   ")
    get_config.cache_clear()
    assert get_config().captcha_answer == "12345"


def test_static_captcha_challenge_and_verify() -> None:
    captcha = StaticCaptcha("12345")
    assert captcha.challenge == "1 2 3 4 5"
    assert captcha.verify("12345")
    assert not captcha.verify("12345 ")
    assert not captcha.verify("")
