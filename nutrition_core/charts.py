from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

from nutrition_core.models import RegionSummary

alt.data_transformers.disable_max_rows()

MEAL_COVERAGE_COLOR = "#10B981"
STUNTING_COLOR = "#EF4444"


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def indicator_frame(summary: RegionSummary) -> pd.DataFrame:
    df = pd.DataFrame(
        [
            {"name": "Meal Coverage", "value": summary.avg_meal_coverage, "fill": MEAL_COVERAGE_COLOR},
            {"name": "Stunting Rate", "value": summary.avg_stunting_rate, "fill": STUNTING_COLOR},
        ]
    )
    df["label"] = df["value"].apply(lambda v: f"{v}%")
    return df


def indicator_chart(summary: RegionSummary, height: int = 320) -> alt.Chart:
    """Bar chart of a region's average meal coverage next to its average stunting rate."""
    df = indicator_frame(summary)
    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("name:N", title=None, sort=None, axis=alt.Axis(labelAngle=0)),
            y=alt.Y("value:Q", title="Percentage (%)", axis=alt.Axis(gridDash=[3, 3])),
            color=alt.Color("fill:N", scale=None, legend=None),
            tooltip=[
                alt.Tooltip("name:N", title="Indicator"),
                alt.Tooltip("label:N", title="Value"),
            ],
        )
        .properties(title=f"{summary.region} - Average Indicators", height=height)
    )
