from __future__ import annotations

import logging
from dataclasses import asdict, fields
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from nutrition_core.models import LoadReport, MealRecord, MergedSubRegion, NutritionRecord, RegionSummary
from nutrition_core.schema import JOIN_KEYS


logger = logging.getLogger(__name__)

MEASURE_AVERAGES = {
    "meal_coverage_percent": "avg_meal_coverage",
    "stunting_rate_percent": "avg_stunting_rate",
    "underweight_rate_percent": "avg_underweight_rate",
}


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    """Round half away from zero (66.65 -> 66.7); None/NaN -> None."""
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def records_frame(records: Iterable[object], record_cls: type) -> pd.DataFrame:
    columns = [f.name for f in fields(record_cls)]
    return pd.DataFrame([asdict(r) for r in records], columns=columns)


def _join(meal_records: Sequence[MealRecord], nutrition_records: Sequence[NutritionRecord]) -> Tuple[pd.DataFrame, pd.DataFrame]:
    meal_df = records_frame(meal_records, MealRecord)
    meal_df["_order"] = range(len(meal_df))

    # Duplicate keys resolve to the earliest nutrition row.
    nutrition_df = records_frame(nutrition_records, NutritionRecord).drop_duplicates(subset=JOIN_KEYS, keep="first")

    merged = meal_df.merge(nutrition_df, on=JOIN_KEYS, how="inner", validate="many_to_one")
    merged = merged.sort_values("_order", kind="stable").reset_index(drop=True)
    return meal_df, merged


def _summarize(region: str, group: pd.DataFrame) -> RegionSummary:
    sub_regions = tuple(
        MergedSubRegion(
            region=region,
            sub_region=row.sub_region,
            meal_coverage_percent=float(row.meal_coverage_percent),
            stunting_rate_percent=float(row.stunting_rate_percent),
            underweight_rate_percent=float(row.underweight_rate_percent),
        )
        for row in group.itertuples(index=False)
    )
    means = group[list(MEASURE_AVERAGES)].astype(float).mean()
    averages = {avg: round_half_up(means[col], 1) for col, avg in MEASURE_AVERAGES.items()}
    return RegionSummary(region=region, sub_regions=sub_regions, **averages)


def merge_with_report(
    meal_records: Sequence[MealRecord],
    nutrition_records: Sequence[NutritionRecord],
) -> Tuple[Tuple[RegionSummary, ...], LoadReport]:
    """Join meal coverage to nutrition rows by (region, sub_region) and average per region.

    Meal rows without a nutrition match are dropped. Regions appear in the
    order they are first seen in ``meal_records``; a region left with no
    matched sub-region is omitted from the result.
    """
    meal_df, merged = _join(meal_records, nutrition_records)

    groups = {region: group for region, group in merged.groupby("region", sort=False)}

    # Region order comes from the meal rows, matched or not.
    seen_regions = list(dict.fromkeys(meal_df["region"].tolist()))
    summaries: List[RegionSummary] = [_summarize(r, groups[r]) for r in seen_regions if r in groups]
    empty_regions = tuple(r for r in seen_regions if r not in groups)

    dropped = len(meal_df) - len(merged)
    if dropped:
        logger.debug("Dropped %d meal rows with no nutrition match", dropped)
    if empty_regions:
        logger.info("Omitting regions with no matched districts: %s", ", ".join(empty_regions))

    report = LoadReport(
        meal_rows=len(meal_df),
        nutrition_rows=len(nutrition_records),
        matched_rows=len(merged),
        dropped_meal_rows=dropped,
        empty_regions=empty_regions,
    )
    return tuple(summaries), report


def merge_by_region(
    meal_records: Sequence[MealRecord],
    nutrition_records: Sequence[NutritionRecord],
) -> Tuple[RegionSummary, ...]:
    summaries, _ = merge_with_report(meal_records, nutrition_records)
    return summaries
