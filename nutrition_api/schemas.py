from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class MergedSubRegionModel(BaseModel):
    region: str
    sub_region: str
    meal_coverage_percent: float
    stunting_rate_percent: float
    underweight_rate_percent: float


class RegionSummaryModel(BaseModel):
    region: str
    sub_regions: List[MergedSubRegionModel] = Field(default_factory=list)
    avg_meal_coverage: Optional[float] = None
    avg_stunting_rate: Optional[float] = None
    avg_underweight_rate: Optional[float] = None


class MetaRegionsResponse(BaseModel):
    regions: List[str]
    default_region: Optional[str] = None
