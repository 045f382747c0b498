from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class MealRecord:
    region: str
    sub_region: str
    meal_coverage_percent: float


@dataclass(frozen=True)
class NutritionRecord:
    region: str
    sub_region: str
    stunting_rate_percent: float
    underweight_rate_percent: float


@dataclass(frozen=True)
class MergedSubRegion:
    region: str
    sub_region: str
    meal_coverage_percent: float
    stunting_rate_percent: float
    underweight_rate_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RegionSummary:
    region: str
    sub_regions: Tuple[MergedSubRegion, ...] = field(default_factory=tuple)
    avg_meal_coverage: Optional[float] = None
    avg_stunting_rate: Optional[float] = None
    avg_underweight_rate: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "region": self.region,
            "sub_regions": [s.to_dict() for s in self.sub_regions],
            "avg_meal_coverage": self.avg_meal_coverage,
            "avg_stunting_rate": self.avg_stunting_rate,
            "avg_underweight_rate": self.avg_underweight_rate,
        }


@dataclass(frozen=True)
class LoadReport:
    """Row accounting for one load + merge cycle."""

    meal_rows: int = 0
    nutrition_rows: int = 0
    matched_rows: int = 0
    dropped_meal_rows: int = 0
    empty_regions: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["empty_regions"] = list(self.empty_regions)
        return out
