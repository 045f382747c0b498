from __future__ import annotations

import logging
import math
from typing import List, Optional

from fastapi import Depends, FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from nutrition_api.deps import get_dashboard_state
from nutrition_api.schemas import MetaRegionsResponse, RegionSummaryModel
from nutrition_core.errors import DashboardError, DataUnavailableError
from nutrition_core.state import DashboardState
from nutrition_core.views import compute_debug, compute_region_view, district_table


app = FastAPI(title="Nutrition & Growth Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:8501"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json(data: object) -> JSONResponse:
    """Return JSON with NaN/inf floats mapped to null."""

    def _safe_float(value: float) -> float | None:
        if math.isnan(value) or math.isinf(value):
            return None
        return value

    return JSONResponse(content=jsonable_encoder(data, custom_encoder={float: _safe_float}))


def _error(exc: Exception, name: str) -> JSONResponse:
    if isinstance(exc, DashboardError):
        logger.warning("%s failed: %s", name, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message, "type": type(exc).__name__})
    logger.exception("%s failed", name)
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


def _require_ready(state: DashboardState) -> DashboardState:
    if not state.is_ready:
        raise DataUnavailableError(state.error or "Dashboard data is not available")
    return state


@app.get("/meta/regions", response_model=MetaRegionsResponse)
def meta_regions(state: DashboardState = Depends(get_dashboard_state)):
    try:
        _require_ready(state)
        return MetaRegionsResponse(regions=state.regions, default_region=state.default_region)
    except Exception as exc:
        return _error(exc, "meta_regions")


@app.get("/summaries", response_model=List[RegionSummaryModel])
def summaries(state: DashboardState = Depends(get_dashboard_state)):
    try:
        _require_ready(state)
        return [RegionSummaryModel(**s.to_dict()) for s in state.summaries]
    except Exception as exc:
        return _error(exc, "summaries")


@app.get("/region")
def region_view(
    region: Optional[str] = Query(default=None),
    state: DashboardState = Depends(get_dashboard_state),
):
    try:
        _require_ready(state)
        if region:
            state.select(region)
        return _json(compute_region_view(state))
    except Exception as exc:
        return _error(exc, "region_view")


@app.get("/debug")
def debug(state: DashboardState = Depends(get_dashboard_state)):
    try:
        return _json(compute_debug(state))
    except Exception as exc:
        return _error(exc, "debug")


@app.get("/export/districts")
def export_districts(
    region: Optional[str] = Query(default=None),
    state: DashboardState = Depends(get_dashboard_state),
):
    try:
        _require_ready(state)
        summary = state.select(region) if region else state.selected_summary
        if summary is None:
            return Response(content=b"", media_type="text/csv")
        csv_bytes = district_table(summary).to_csv(index=False).encode("utf-8")
        filename = f"{summary.region.replace(' ', '_').lower()}_districts.csv"
        return Response(
            content=csv_bytes,
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
    except Exception as exc:
        return _error(exc, "export_districts")
