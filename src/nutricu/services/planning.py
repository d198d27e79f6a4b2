"""Seven-day ICU nutrition ramp planning."""

from nutricu.domain.nutrition import NutritionDay, NutritionPlan
from nutricu.domain.patients import Patient
from nutricu.services.anthropometrics import calculation_weight
from nutricu.services.numbers import round1, round_int

# (day, kcal per kg, protein g per kg)
RAMP_SCHEDULE: tuple[tuple[int, float, float], ...] = (
    (1, 5, 0.325),
    (2, 10, 0.65),
    (3, 15, 0.975),
    (4, 20, 1.3),
    (5, 25, 1.3),
    (6, 25, 1.4),
    (7, 30, 1.5),
)

KIDNEY_FAILURE_PROTEIN_FACTOR = 0.8
DIALYSIS_PROTEIN_FACTOR = 1.2


def build_nutrition_plan(patient: Patient) -> NutritionPlan:
    """Build the ramp plan scaled by the patient's dosing weight."""
    weight = calculation_weight(patient)
    days = tuple(
        _build_day(day, kcal_per_kg, protein_per_kg, weight, patient.has_kidney_failure)
        for day, kcal_per_kg, protein_per_kg in RAMP_SCHEDULE
    )
    return NutritionPlan(days=days)


def target_protein(day: NutritionDay, has_kidney_failure: bool) -> float:
    """Protein target used for deviation, reduced for kidney failure."""
    if has_kidney_failure and day.protein_with_kidney_failure is not None:
        return day.protein_with_kidney_failure
    return day.protein


def _build_day(
    day: int,
    kcal_per_kg: float,
    protein_per_kg: float,
    weight: float,
    has_kidney_failure: bool,
) -> NutritionDay:
    protein = round1(protein_per_kg * weight)
    if not has_kidney_failure:
        return NutritionDay(
            day=day, calories=round_int(kcal_per_kg * weight), protein=protein
        )
    # Both variants derive from the base protein, never from each other.
    return NutritionDay(
        day=day,
        calories=round_int(kcal_per_kg * weight),
        protein=protein,
        protein_with_kidney_failure=round1(protein * KIDNEY_FAILURE_PROTEIN_FACTOR),
        protein_with_dialysis=round1(protein * DIALYSIS_PROTEIN_FACTOR),
    )
