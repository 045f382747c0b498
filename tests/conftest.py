"""Shared fixtures: small meal coverage / nutrition sources."""
import pytest

from nutrition_core.models import MealRecord, NutritionRecord

MEAL_CSV = """State,District,Meal_Coverage_Percent
Bihar,Patna,60
Bihar,Gaya,80
Kerala,Wayanad,95.5
Kerala,Idukki,90
Odisha,Koraput,70
"""

NUTRITION_CSV = """State,District,Stunting_Rate_Percent,Underweight_Rate_Percent
Bihar,Gaya,20,10
Bihar,Patna,40,30
Kerala,Wayanad,25.5,20.5
Kerala,Wayanad,99,99
"""


@pytest.fixture
def meal_csv():
    return MEAL_CSV


@pytest.fixture
def nutrition_csv():
    return NUTRITION_CSV


@pytest.fixture
def source_files(tmp_path):
    meal_path = tmp_path / "meal.csv"
    nutrition_path = tmp_path / "nutrition.csv"
    meal_path.write_text(MEAL_CSV, encoding="utf-8")
    nutrition_path.write_text(NUTRITION_CSV, encoding="utf-8")
    return meal_path, nutrition_path


@pytest.fixture
def bihar_records():
    meals = [MealRecord("Bihar", "A", 60), MealRecord("Bihar", "B", 80)]
    nutrition = [NutritionRecord("Bihar", "A", 40, 30), NutritionRecord("Bihar", "B", 20, 10)]
    return meals, nutrition
