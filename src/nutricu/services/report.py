"""Plain-text reports for copying and sharing calculations."""

import math
from collections.abc import Sequence

from nutricu.domain.mixtures import Mixture
from nutricu.domain.nutrition import NutritionDay, NutritionPlan
from nutricu.domain.patients import Gender, Patient
from nutricu.services.anthropometrics import (
    bmi_category,
    compute_derived_patient_fields,
)
from nutricu.services.localization import Translator
from nutricu.services.numbers import format_number
from nutricu.services.planning import target_protein
from nutricu.services.reconciliation import (
    ExportSelection,
    VolumeAdjustments,
    reconcile_volume,
)


def format_report(  # noqa: PLR0913
    patient: Patient,
    plan: NutritionPlan,
    mixtures: Sequence[Mixture],
    export_selection: ExportSelection,
    localize: Translator,
    adjustments: VolumeAdjustments | None = None,
) -> str:
    """Render the mixture calculation report.

    A day with a mixture selected for export lists only that mixture; a day
    whose selected mixture is not among ``mixtures`` is left out. Other days
    list every mixture.
    """
    t = localize
    overrides = adjustments or VolumeAdjustments()
    lines = _patient_lines(patient, t)
    lines.append("")
    lines.append(f"{t('nutritionPlan')}:")
    for day in plan.days:
        selected_id = export_selection.selected(day.day)
        if selected_id:
            day_mixtures = [m for m in mixtures if m.id == selected_id]
            if not day_mixtures:
                continue
        else:
            day_mixtures = list(mixtures)
        lines.append(f"{t('day')} {day.day}:")
        lines.append(f"- {t('requirement')}: {_requirement(day, patient, t)}")
        for mixture in day_mixtures:
            lines.extend(_mixture_lines(day, mixture, patient, overrides, t))
        lines.append("")

    if patient.has_refeeding_risk:
        lines.append(t("refeedingWarning"))
        lines.append(t("refeedingInstructions"))
    if patient.has_kidney_failure:
        lines.append("")
        lines.append(t("kidneyWarning"))
        lines.append(t("kidneyInstructions"))
    return "\n".join(lines) + "\n"


def format_plan_report(
    patient: Patient, plan: NutritionPlan, localize: Translator
) -> str:
    """Render the patient summary with the daily targets of the ramp plan."""
    t = localize
    lines = _patient_lines(compute_derived_patient_fields(patient), t)
    lines.append("")
    lines.append(f"{t('nutritionPlan')}:")
    protein_word = t("proteinGenitive")
    for day in plan.days:
        lines.append(f"{t('day')} {day.day}: {_requirement(day, patient, t)}")
        if patient.has_kidney_failure and day.protein_with_dialysis is not None:
            dialysis = format_number(day.protein_with_dialysis)
            lines.append(f"  {t('ifDialysis')}: {dialysis} {t('g')} {protein_word}")

    if patient.has_refeeding_risk:
        lines.append("")
        lines.append(t("refeedingWarning"))
        lines.append(t("refeedingInstructions"))
    return "\n".join(lines) + "\n"


def format_deviation(deviation: float, localize: Translator) -> str:
    """Describe a signed deviation, e.g. ``23.2% below norm``.

    A non-finite deviation (zero target) has no percentage to show.
    """
    if not math.isfinite(deviation):
        return localize("noTarget")
    if deviation < 0:
        return f"{format_number(abs(deviation))}% {localize('belowNorm')}"
    if deviation > 0:
        return f"{format_number(deviation)}% {localize('aboveNorm')}"
    return localize("matchesNorm")


def _patient_lines(patient: Patient, t: Translator) -> list[str]:
    gender = t("male") if patient.gender == Gender.MALE else t("female")
    lines = [
        f"{t('id')} {t('patients').lower()}: {patient.id}",
        f"{t('gender')}: {gender}",
        f"{t('age')}: {patient.age} {t('years')}",
        f"{t('height')}: {format_number(patient.height)} {t('cm')}",
        f"{t('actualWeight')}: {format_number(patient.weight)} {t('kg')}",
    ]
    if patient.bmi is not None:
        category = bmi_category(patient.bmi).category
        lines.append(
            f"{t('bmi')}: {format_number(patient.bmi)} {t('kgm2')} ({t(category)})"
        )
    for key, value in (
        ("idealWeight", patient.ideal_weight),
        ("adjustedWeight", patient.adjusted_weight),
        ("calculationWeight", patient.calculation_weight),
    ):
        if value is not None:
            lines.append(f"{t(key)}: {format_number(value)} {t('kg')}")
    lines.extend(
        [
            f"{t('diabetes')}: {_yes_no(patient.has_diabetes, t)}",
            f"{t('kidneyFailure')}: {_yes_no(patient.has_kidney_failure, t)}",
            f"{t('refeedingRisk')}: {_yes_no(patient.has_refeeding_risk, t)}",
        ]
    )
    return lines


def _requirement(day: NutritionDay, patient: Patient, t: Translator) -> str:
    protein = format_number(target_protein(day, patient.has_kidney_failure))
    return f"{day.calories} {t('kcal')}, {protein} {t('g')} {t('proteinGenitive')}"


def _mixture_lines(
    day: NutritionDay,
    mixture: Mixture,
    patient: Patient,
    adjustments: VolumeAdjustments,
    t: Translator,
) -> list[str]:
    result = reconcile_volume(
        day,
        mixture,
        adjustments.get(day.day, mixture.id),
        has_kidney_failure=patient.has_kidney_failure,
    )
    calories = format_deviation(result.calorie_deviation, t)
    protein = format_deviation(result.protein_deviation, t)
    return [
        f"  * {mixture.name}:",
        f"    - {t('volume')}: {result.volume} {t('ml')}",
        f"    - {t('energy')}: {result.delivered_calories} {t('kcal')} ({calories})",
        f"    - {t('protein')}: {format_number(result.delivered_protein)} "
        f"{t('g')} ({protein})",
    ]


def _yes_no(flag: bool, t: Translator) -> str:
    return t("yes") if flag else t("no")
