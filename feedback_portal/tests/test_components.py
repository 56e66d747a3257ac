from __future__ import annotations

from unittest.mock import MagicMock, patch

from feedback_portal.core.models import Phase, RenderBranch, UploadState
from feedback_portal.ui import components


def _succeeded(analytics) -> UploadState:
    return UploadState(phase=Phase.SUCCEEDED, status_message="Analysis complete!", analytics=analytics)


def test_missing_key_themes_renders_error_view_not_chart(analytics_payload) -> None:
    state = _succeeded({"sentiment": analytics_payload["sentiment"]})

    with patch.object(components, "st", MagicMock()) as fake_st:
        branch = components.render_results_panel(state)

    assert branch is RenderBranch.UNEXPECTED_FORMAT
    fake_st.plotly_chart.assert_not_called()
    fake_st.error.assert_called_once()
    assert "unexpected format" in fake_st.error.call_args.args[0]


def test_result_renders_sentiment_and_theme_charts(analytics_payload) -> None:
    fake_st = MagicMock()
    fake_st.columns.side_effect = lambda spec: [MagicMock() for _ in range(spec if isinstance(spec, int) else len(spec))]

    with patch.object(components, "st", fake_st):
        branch = components.render_results_panel(_succeeded(analytics_payload))

    assert branch is RenderBranch.RESULT
    chart_keys = [call.kwargs["key"] for call in fake_st.plotly_chart.call_args_list]
    assert chart_keys == ["sentiment_pie_chart", "theme_mentions_chart"]
    fake_st.error.assert_not_called()


def test_placeholder_when_idle() -> None:
    with patch.object(components, "st", MagicMock()) as fake_st:
        branch = components.render_results_panel(UploadState())

    assert branch is RenderBranch.EMPTY
    assert "Welcome!" in fake_st.markdown.call_args.args[0]


def test_status_message_styling() -> None:
    with patch.object(components, "st", MagicMock()) as fake_st:
        components.render_status_message(UploadState(phase=Phase.FAILED, status_message="bad csv"))
        components.render_status_message(_succeeded({"sentiment": {}, "keyThemes": []}))
        components.render_status_message(UploadState())

    fake_st.error.assert_called_once_with("bad csv")
    fake_st.success.assert_called_once_with("Analysis complete!")


def test_loading_view_shown_before_pending_upload_runs(sample_file) -> None:
    submitting = UploadState(phase=Phase.SUBMITTING, selected_file=sample_file, captcha_input="12345")
    events = []

    with patch.object(components, "st", MagicMock()) as fake_st:
        fake_st.info.side_effect = lambda text: events.append(("info", text))
        branch = components.render_results_panel(submitting, on_loading=lambda s: events.append(("upload", s)))

    assert branch is RenderBranch.LOADING
    assert events == [("info", "⏳ Analyzing data..."), ("upload", submitting)]
    fake_st.plotly_chart.assert_not_called()


def test_loading_callback_ignored_outside_submitting() -> None:
    on_loading = MagicMock()

    with patch.object(components, "st", MagicMock()):
        components.render_results_panel(UploadState(), on_loading=on_loading)
        components.render_results_panel(UploadState(phase=Phase.FAILED, status_message="bad csv"), on_loading=on_loading)

    on_loading.assert_not_called()
