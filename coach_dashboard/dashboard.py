"""
Dashboard-ready output functions.

These are the entry points for the Streamlit front end. Each function
returns plain dicts or DataFrames suitable for rendering cards, the bar
chart, and the pager.
"""

import logging
from collections.abc import Sequence

import pandas as pd
import plotly.graph_objects as go

from .config import (
    BUS_DATA_URL,
    DEMO_MODE,
    STAGE_BANDS,
    STATUS_COLORS,
    SUMMARY_URL,
)
from .models import BusRecord, ViewState
from .simulator import DEMO_BUS_SOURCE, DEMO_SUMMARY_SOURCE
from .state import Snapshot
from .views import apply_view, clamp_page

logger = logging.getLogger(__name__)

CHART_COLUMNS = ["label", "work_pct", "status", "stage", "color", "border_color", "text"]


def configured_sources(demo: bool = DEMO_MODE) -> tuple[str, str]:
    """Return (bus_source, summary_source) for this deployment."""
    if demo:
        return DEMO_BUS_SOURCE, DEMO_SUMMARY_SOURCE
    return BUS_DATA_URL, SUMMARY_URL


def classify_stage(work_pct: float) -> str:
    """Return the production stage band a work percentage falls in.

    Bands are half-open [lower, upper) except the last, which includes 100.
    """
    for label, lower, upper, _ in STAGE_BANDS:
        if lower <= work_pct < upper:
            return label
    return STAGE_BANDS[-1][0] if work_pct >= STAGE_BANDS[-1][2] else STAGE_BANDS[0][0]


def format_percent(value: float) -> str:
    """Bar label: 40.0 -> "40%", 42.5 -> "42.5%"."""
    return f"{value:g}%"


def build_chart_frame(visible: Sequence[BusRecord]) -> pd.DataFrame:
    """One row per bar, in display order.

    Returns
    -------
    DataFrame with columns:
        label, work_pct, status, stage, color, border_color, text
    """
    if not visible:
        return pd.DataFrame(columns=CHART_COLUMNS)

    rows = []
    for record in visible:
        fill, border = STATUS_COLORS[record.status.value]
        rows.append({
            "label": record.id,
            "work_pct": record.work_pct,
            "status": record.status.value,
            "stage": classify_stage(record.work_pct),
            "color": fill,
            "border_color": border,
            "text": format_percent(record.work_pct),
        })

    return pd.DataFrame(rows, columns=CHART_COLUMNS)


def build_chart_figure(chart_df: pd.DataFrame) -> go.Figure:
    """Bar chart of a chart frame over the production stage bands.

    Bars sit at their row position with the labels as tick text, so blank
    or repeated labels still get one bar each.
    """
    positions = list(range(len(chart_df)))
    labels = chart_df["label"].tolist()

    fig = go.Figure(go.Bar(
        x=positions,
        y=chart_df["work_pct"],
        marker_color=chart_df["color"],
        marker_line_color=chart_df["border_color"],
        marker_line_width=1,
        text=chart_df["text"],
        textposition="outside",
        textfont=dict(color="#000", size=12),
        customdata=chart_df[["label", "stage", "status"]].to_numpy(),
        hovertemplate=(
            "<b>%{customdata[0]}</b><br>"
            "Total work: %{y}%<br>"
            "Stage: %{customdata[1]}<br>"
            "Status: %{customdata[2]}"
            "<extra></extra>"
        ),
    ))

    # Production stage bands behind the bars
    for label, lower, upper, fill in STAGE_BANDS:
        fig.add_hrect(
            y0=lower, y1=upper,
            fillcolor=fill, line_width=0, layer="below",
            annotation_text=f"<b>{label}</b>",
            annotation_position="left",
        )

    fig.update_layout(
        height=500,
        showlegend=False,
        yaxis=dict(range=[0, 108], dtick=25, title="Total Work Done (%)"),
        xaxis=dict(tickmode="array", tickvals=positions, ticktext=labels, title=""),
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=50, r=10, t=10, b=40),
    )
    return fig


def get_dashboard_view(snapshot: Snapshot, view_state: ViewState) -> dict:
    """Single entry point the front end calls on every render.

    A page left out of range by a shrinking data set is pulled back to the
    last valid page; the returned "page" is the one actually shown.

    Returns
    -------
    Dict with structure:
    {
        "mode": "Descending",
        "page": 0, "page_count": 3, "has_previous": False, "has_next": True,
        "counts": {"total": 45, "active": 30, "inactive": 15},
        "summary": {"date": ..., "manpower_present": ..., ..., "found": True},
        "chart": DataFrame (see build_chart_frame),
        "last_updated": datetime | None,
    }
    """
    page = clamp_page(view_state.page, len(snapshot.records))
    if page != view_state.page:
        view_state = ViewState(mode=view_state.mode, page=page)

    result = apply_view(snapshot.records, view_state)
    summary = snapshot.summary

    return {
        "mode": result.mode.value,
        "page": result.page,
        "page_count": result.page_count,
        "has_previous": result.has_previous,
        "has_next": result.has_next,
        "counts": {
            "total": result.counts.total,
            "active": result.counts.active,
            "inactive": result.counts.inactive,
        },
        "summary": {
            "date": summary.date,
            "manpower_present": summary.manpower_present,
            "drivers_present": summary.drivers_present,
            "supervisors_present": summary.supervisors_present,
            "found": summary.found,
        },
        "chart": build_chart_frame(result.visible),
        "last_updated": snapshot.last_updated,
    }
