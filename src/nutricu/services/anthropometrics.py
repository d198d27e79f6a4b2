"""Anthropometric calculations and dosing weight selection."""

import math
from dataclasses import replace

from nutricu.domain.nutrition import (
    ERROR_COLOR,
    ORANGE_COLOR,
    SUCCESS_COLOR,
    BmiCategory,
)
from nutricu.domain.patients import Gender, Patient
from nutricu.services.numbers import round1

OBESITY_BMI = 30.0

# Upper bounds are exclusive; anything at or above the last bound is obesity3.
_BMI_CATEGORIES: tuple[tuple[float, str, str], ...] = (
    (16.0, "severeDef", ERROR_COLOR),
    (18.5, "deficit", ORANGE_COLOR),
    (25.0, "normal", SUCCESS_COLOR),
    (30.0, "overweight", ORANGE_COLOR),
    (35.0, "obesity1", ERROR_COLOR),
    (40.0, "obesity2", ERROR_COLOR),
)
_TOP_CATEGORY = BmiCategory(category="obesity3", color=ERROR_COLOR)


def bmi(weight_kg: float, height_cm: float) -> float:
    """Body mass index rounded to one decimal.

    Height must be positive. A zero height is not rejected here: it yields
    ``inf`` (or ``nan`` for a zero weight), matching IEEE division.
    """
    height_m = height_cm / 100
    squared = height_m * height_m
    if squared == 0:
        return math.nan if weight_kg == 0 else math.copysign(math.inf, weight_kg)
    return round1(weight_kg / squared)


def bmi_category(value: float) -> BmiCategory:
    """Classify a BMI value using exact cutoffs."""
    for upper, category, color in _BMI_CATEGORIES:
        if value < upper:
            return BmiCategory(category=category, color=color)
    return _TOP_CATEGORY


def ideal_weight(height_cm: float, gender: Gender) -> float:
    """Ideal body weight by the Devine formula.

    No physiological floor is applied, so very short statures produce small
    or negative values.
    """
    base = 50.0 if gender == Gender.MALE else 45.5
    return round1(base + 0.91 * (height_cm - 152.4))


def adjusted_weight(actual_weight: float, ideal: float) -> float:
    """Adjusted body weight: ideal plus 40% of the excess."""
    return round1(0.4 * (actual_weight - ideal) + ideal)


def calculation_weight(patient: Patient) -> float:
    """Return the dosing weight: adjusted weight when BMI >= 30, else actual.

    Always derived from height, weight and gender, never from stored fields.
    """
    patient_bmi = bmi(patient.weight, patient.height)
    if patient_bmi >= OBESITY_BMI:
        ideal = ideal_weight(patient.height, patient.gender)
        return adjusted_weight(patient.weight, ideal)
    return patient.weight


def compute_derived_patient_fields(patient: Patient) -> Patient:
    """Return a copy of the patient with all derived weights recomputed."""
    patient_bmi = bmi(patient.weight, patient.height)
    ideal = ideal_weight(patient.height, patient.gender)
    return replace(
        patient,
        bmi=patient_bmi,
        ideal_weight=ideal,
        adjusted_weight=adjusted_weight(patient.weight, ideal),
        calculation_weight=calculation_weight(patient),
    )
