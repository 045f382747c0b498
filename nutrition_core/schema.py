"""Column schemas for the two dashboard sources.

``columns`` maps the source header to ``(field, type)`` where type is
``"text"`` (kept verbatim) or ``"number"`` (coerced, must be numeric).
"""

TEXT = "text"
NUMBER = "number"

MEAL_COVERAGE = {
    "name": "midday_meal_coverage",
    "source_name": "Mid-Day Meal scheme coverage (district level)",
    "columns": {
        "State": ("region", TEXT),
        "District": ("sub_region", TEXT),
        "Meal_Coverage_Percent": ("meal_coverage_percent", NUMBER),
    },
    "measures": {
        "meal_coverage_percent": "Percentage of school children covered by the mid-day meal programme",
    },
}

NUTRITION = {
    "name": "child_nutrition_nfhs5",
    "source_name": "NFHS-5 child nutrition indicators (district level)",
    "columns": {
        "State": ("region", TEXT),
        "District": ("sub_region", TEXT),
        "Stunting_Rate_Percent": ("stunting_rate_percent", NUMBER),
        "Underweight_Rate_Percent": ("underweight_rate_percent", NUMBER),
    },
    "measures": {
        "stunting_rate_percent": "Children under 5 who are stunted (height-for-age)",
        "underweight_rate_percent": "Children under 5 who are underweight (weight-for-age)",
    },
}

JOIN_KEYS = ["region", "sub_region"]


def field_names(schema: dict) -> list:
    return [f for f, _ in schema["columns"].values()]
