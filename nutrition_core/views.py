from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from nutrition_core.charts import indicator_chart, to_vega_spec
from nutrition_core.models import RegionSummary
from nutrition_core.schema import MEAL_COVERAGE, NUTRITION
from nutrition_core.state import DashboardState

DISTRICT_COLUMNS = {
    "sub_region": "District Name",
    "meal_coverage_percent": "Meal Coverage (%)",
    "stunting_rate_percent": "Stunting Rate (%)",
    "underweight_rate_percent": "Underweight Rate (%)",
}


def district_table(summary: RegionSummary) -> pd.DataFrame:
    rows = [{col: getattr(d, col) for col in DISTRICT_COLUMNS} for d in summary.sub_regions]
    return pd.DataFrame(rows, columns=list(DISTRICT_COLUMNS)).rename(columns=DISTRICT_COLUMNS)


def summary_sentence(summary: RegionSummary) -> str:
    return (
        f"In {summary.region}, the average meal coverage is {summary.avg_meal_coverage}% "
        f"and average stunting rate is {summary.avg_stunting_rate}%."
    )


def compute_region_view(state: DashboardState) -> Dict[str, Any]:
    summary = state.selected_summary
    if summary is None:
        return {"region": None, "regions": state.regions, "kpis": {}, "summary": None, "charts": {}, "table": []}

    return {
        "region": summary.region,
        "regions": state.regions,
        "kpis": {
            "avg_meal_coverage": summary.avg_meal_coverage,
            "avg_stunting_rate": summary.avg_stunting_rate,
            "avg_underweight_rate": summary.avg_underweight_rate,
            "district_count": len(summary.sub_regions),
        },
        "summary": summary_sentence(summary),
        "charts": {"indicators": to_vega_spec(indicator_chart(summary))},
        "table": district_table(summary).to_dict(orient="records"),
    }


def build_data_dictionary() -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for schema in (MEAL_COVERAGE, NUTRITION):
        for source_col, (field, kind) in schema["columns"].items():
            rows.append({
                "dataset": schema["name"],
                "column": source_col,
                "field": field,
                "type": kind,
                "description": schema["measures"].get(field, ""),
                "source_name": schema["source_name"],
            })
    return rows


def compute_debug(state: DashboardState) -> Dict[str, Any]:
    return {
        "status": state.status.value,
        "error": state.error,
        "row_counts": state.report.to_dict(),
        "region_counts": [{"region": s.region, "districts": len(s.sub_regions)} for s in state.summaries],
        "data_dictionary": build_data_dictionary(),
    }
