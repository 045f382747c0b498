from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import pandas as pd
import requests

from nutrition_core.errors import DataUnavailableError, ParseFailure, ResourceUnavailable
from nutrition_core.merge import merge_with_report
from nutrition_core.models import MealRecord, NutritionRecord
from nutrition_core.schema import MEAL_COVERAGE, NUMBER, NUTRITION, field_names
from nutrition_core.state import DashboardState


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
MEAL_COVERAGE_PATH = DATA_DIR / "midday_meal_coverage.csv"
NUTRITION_PATH = DATA_DIR / "child_nutrition_nfhs5.csv"
HTTP_TIMEOUT = 30

Location = Union[str, Path]


def fetch_text(location: Location) -> str:
    """Return the full text of a local file or an http(s) resource."""
    loc = str(location)
    if loc.startswith(("http://", "https://")):
        try:
            r = requests.get(loc, timeout=HTTP_TIMEOUT)
            r.raise_for_status()
        except requests.RequestException as exc:
            raise ResourceUnavailable(loc, str(exc)) from exc
        r.encoding = "utf-8"
        text = r.text
        return text[1:] if text.startswith("\ufeff") else text

    try:
        return Path(loc).read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseFailure(loc, "not valid UTF-8 text") from exc
    except OSError as exc:
        raise ResourceUnavailable(loc, exc.strerror or str(exc)) from exc


def _drop_blank_rows(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return df
    blank = df.apply(lambda s: s.str.strip().eq("")).all(axis=1)
    return df[~blank]


def parse_table(text: str, schema: dict, source: Optional[str] = None) -> pd.DataFrame:
    """Parse header-delimited CSV text into a frame typed by ``schema``.

    Every cell is read as text first; number columns are then coerced and
    any blank or non-numeric cell fails the whole parse.
    """
    source = source or schema["name"]
    if not text.strip():
        return pd.DataFrame(columns=field_names(schema))

    try:
        raw = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False, skip_blank_lines=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise ParseFailure(source, str(exc)) from exc

    raw = _drop_blank_rows(raw.fillna(""))

    columns = schema["columns"]
    missing = [c for c in columns if c not in raw.columns]
    if missing:
        raise ParseFailure(source, f"missing columns: {', '.join(missing)}")

    out = raw[list(columns)].rename(columns={src: f for src, (f, _) in columns.items()}).reset_index(drop=True)
    for src, (field, kind) in columns.items():
        if kind != NUMBER:
            continue
        values = pd.to_numeric(out[field].str.strip(), errors="coerce")
        bad = values.isna()
        if bad.any():
            pos = int(bad.to_numpy().argmax())
            raise ParseFailure(source, f"expected a number, got {out[field].iloc[pos]!r}", column=src, row=pos + 1)
        out[field] = values.astype(float)
    return out


def parse_meal_records(text: str, source: Optional[str] = None) -> Tuple[MealRecord, ...]:
    df = parse_table(text, MEAL_COVERAGE, source)
    return tuple(MealRecord(**row) for row in df.to_dict(orient="records"))


def parse_nutrition_records(text: str, source: Optional[str] = None) -> Tuple[NutritionRecord, ...]:
    df = parse_table(text, NUTRITION, source)
    return tuple(NutritionRecord(**row) for row in df.to_dict(orient="records"))


def load_sources(
    meal_location: Location = MEAL_COVERAGE_PATH,
    nutrition_location: Location = NUTRITION_PATH,
) -> Tuple[Tuple[MealRecord, ...], Tuple[NutritionRecord, ...]]:
    """Fetch and parse both sources; any failure aborts the whole load."""
    logger.info("Loading meal coverage from %s", meal_location)
    meals = parse_meal_records(fetch_text(meal_location), str(meal_location))
    logger.info("Loading nutrition indicators from %s", nutrition_location)
    nutrition = parse_nutrition_records(fetch_text(nutrition_location), str(nutrition_location))
    logger.info("Parsed %d meal rows and %d nutrition rows", len(meals), len(nutrition))
    return meals, nutrition


def load_dashboard_state(
    meal_location: Optional[Location] = None,
    nutrition_location: Optional[Location] = None,
) -> DashboardState:
    """Run a full load + merge cycle and wrap the result in a fresh state.

    Load failures are logged and reported as an unavailable state.
    """
    try:
        meals, nutrition = load_sources(
            meal_location or MEAL_COVERAGE_PATH,
            nutrition_location or NUTRITION_PATH,
        )
    except DataUnavailableError as exc:
        logger.exception("Dashboard data unavailable")
        return DashboardState.unavailable(exc.message)

    summaries, report = merge_with_report(meals, nutrition)
    logger.info("Built %d region summaries from %d matched districts", len(summaries), report.matched_rows)
    return DashboardState.ready(summaries, report=report)
