from __future__ import annotations

from typing import List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from feedback_portal.core.models import ChartSlice, ThemeItem


def _apply_layout(fig: go.Figure) -> go.Figure:
    fig.update_layout(
        template="plotly_white",
        title_font_size=18,
        title_font_color="#1f2937",
        title_font_weight=600,
        font=dict(family="Inter, sans-serif"),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
        margin=dict(t=60, l=50, r=50, b=50),
    )
    return fig


def create_sentiment_pie_chart(series: List[ChartSlice]) -> go.Figure:
    """Pie chart of the sentiment breakdown with fixed colors per category."""
    if not series:
        return go.Figure()

    sentiment_df = pd.DataFrame(
        [{"label": item.label, "value": item.value} for item in series]
    )
    fig = px.pie(
        sentiment_df,
        names="label",
        values="value",
        color="label",
        color_discrete_map={item.label: item.color for item in series},
        category_orders={"label": [item.label for item in series]},
        title="Overall Sentiment",
    )
    fig.update_traces(
        sort=False,
        texttemplate="%{label} %{percent:.0%}",
        hovertemplate="%{label}: %{value}<extra></extra>",
    )
    fig.update_layout(legend_title_text="")
    return _apply_layout(fig)


def create_theme_mentions_chart(items: List[ThemeItem]) -> go.Figure:
    """Horizontal bar chart of mentions per theme, keeping the reported order."""
    if not items:
        return go.Figure()

    themes_df = pd.DataFrame(
        [{"theme": item.theme.theme or f"Theme {item.key + 1}", "mentions": item.theme.mentions} for item in items]
    )
    fig = px.bar(
        themes_df,
        x="mentions",
        y="theme",
        orientation="h",
        title="Mentions by Theme",
    )
    fig.update_traces(marker_color="#3b82f6")
    fig.update_yaxes(autorange="reversed", title="")
    fig.update_xaxes(title="Mentions")
    return _apply_layout(fig)
