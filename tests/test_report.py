"""Tests for text report formatting."""

import math

from nutricu.services.anthropometrics import compute_derived_patient_fields
from nutricu.services.localization import get_translator
from nutricu.services.planning import build_nutrition_plan
from nutricu.services.reconciliation import ExportSelection, VolumeAdjustments
from nutricu.services.report import (
    format_deviation,
    format_plan_report,
    format_report,
)
from tests.conftest import echo_translator, make_mixture, make_patient

FREZUBIN = make_mixture()
PEPTAMEN = make_mixture(
    id="5", name="Пептамен интенс", calories_per_1000ml=1000, protein_per_1000ml=93
)


def _day_section(report: str, day: int) -> list[str]:
    lines = report.splitlines()
    start = lines.index(f"day {day}:")
    end = lines.index("", start)
    return lines[start:end]


def test_report_patient_block() -> None:
    patient = compute_derived_patient_fields(make_patient())
    plan = build_nutrition_plan(patient)

    report = format_report(
        patient, plan, [FREZUBIN], ExportSelection(), echo_translator
    )
    lines = report.splitlines()

    assert lines[:13] == [
        "id patients: P-1",
        "gender: male",
        "age: 54 years",
        "height: 170 cm",
        "actualWeight: 70 kg",
        "bmi: 24.2 kgm2 (normal)",
        "idealWeight: 66 kg",
        "adjustedWeight: 67.6 kg",
        "calculationWeight: 70 kg",
        "diabetes: no",
        "kidneyFailure: no",
        "refeedingRisk: no",
        "",
    ]
    assert lines[13] == "nutritionPlan:"


def test_report_skips_undefined_derived_fields() -> None:
    patient = make_patient()
    plan = build_nutrition_plan(patient)

    report = format_report(patient, plan, [], ExportSelection(), echo_translator)

    assert "bmi:" not in report
    assert "idealWeight" not in report
    assert "calculationWeight" not in report


def test_report_day_lists_every_mixture_without_selection() -> None:
    patient = compute_derived_patient_fields(make_patient())
    plan = build_nutrition_plan(patient)

    report = format_report(
        patient, plan, [FREZUBIN, PEPTAMEN], ExportSelection(), echo_translator
    )
    section = _day_section(report, 1)

    assert section[1] == "- requirement: 350 kcal, 22.8 g proteinGenitive"
    assert section[2:6] == [
        "  * Фрезубин ВП 2 ккал:",
        "    - volume: 175 ml",
        "    - energy: 350 kcal (matchesNorm)",
        "    - protein: 17.5 g (23.2% belowNorm)",
    ]
    assert [line for line in section if line.startswith("  * ")] == [
        "  * Фрезубин ВП 2 ккал:",
        "  * Пептамен интенс:",
    ]


def test_report_day_with_export_selection_lists_one_mixture() -> None:
    patient = compute_derived_patient_fields(make_patient())
    plan = build_nutrition_plan(patient)
    selection = ExportSelection()
    selection.toggle(1, PEPTAMEN.id)

    report = format_report(
        patient, plan, [FREZUBIN, PEPTAMEN], selection, echo_translator
    )

    day_one = [line for line in _day_section(report, 1) if line.startswith("  * ")]
    day_two = [line for line in _day_section(report, 2) if line.startswith("  * ")]
    assert day_one == ["  * Пептамен интенс:"]
    assert len(day_two) == 2


def test_report_skips_day_when_selected_mixture_is_missing() -> None:
    patient = compute_derived_patient_fields(make_patient())
    plan = build_nutrition_plan(patient)
    selection = ExportSelection.from_mapping({3: "99"})

    report = format_report(patient, plan, [FREZUBIN], selection, echo_translator)

    assert "day 3:" not in report.splitlines()
    assert "day 4:" in report.splitlines()


def test_report_uses_volume_overrides() -> None:
    patient = compute_derived_patient_fields(make_patient())
    plan = build_nutrition_plan(patient)
    adjustments = VolumeAdjustments.from_mapping({1: {FREZUBIN.id: 200}})

    report = format_report(
        patient,
        plan,
        [FREZUBIN],
        ExportSelection(),
        echo_translator,
        adjustments=adjustments,
    )
    section = _day_section(report, 1)

    assert "    - volume: 200 ml" in section
    assert "    - energy: 400 kcal (14.3% aboveNorm)" in section
    assert "    - protein: 20 g (12.3% belowNorm)" in section


def test_report_appends_advisories_in_order() -> None:
    patient = compute_derived_patient_fields(
        make_patient(has_refeeding_risk=True, has_kidney_failure=True)
    )
    plan = build_nutrition_plan(patient)

    report = format_report(
        patient, plan, [FREZUBIN], ExportSelection(), echo_translator
    )

    assert report.endswith(
        "refeedingWarning\nrefeedingInstructions\n\nkidneyWarning\nkidneyInstructions\n"
    )
    assert "- requirement: 350 kcal, 18.2 g proteinGenitive" in report


def test_report_omits_advisories_without_flags() -> None:
    patient = compute_derived_patient_fields(make_patient())
    plan = build_nutrition_plan(patient)

    report = format_report(
        patient, plan, [FREZUBIN], ExportSelection(), echo_translator
    )

    assert "refeedingWarning" not in report
    assert "kidneyWarning" not in report


def test_report_is_deterministic() -> None:
    patient = compute_derived_patient_fields(make_patient(has_refeeding_risk=True))
    plan = build_nutrition_plan(patient)
    translator = get_translator("en")

    first = format_report(patient, plan, [FREZUBIN], ExportSelection(), translator)
    second = format_report(patient, plan, [FREZUBIN], ExportSelection(), translator)

    assert first == second


def test_report_in_russian() -> None:
    patient = compute_derived_patient_fields(make_patient())
    plan = build_nutrition_plan(patient)

    report = format_report(
        patient, plan, [FREZUBIN], ExportSelection(), get_translator("ru")
    )

    assert report.startswith("ID пациента: P-1\n")
    assert "- Потребность: 350 ккал, 22.8 г белка" in report


def test_format_deviation() -> None:
    assert format_deviation(-23.2, echo_translator) == "23.2% belowNorm"
    assert format_deviation(14.3, echo_translator) == "14.3% aboveNorm"
    assert format_deviation(0.0, echo_translator) == "matchesNorm"
    assert format_deviation(math.nan, echo_translator) == "noTarget"
    assert format_deviation(math.inf, echo_translator) == "noTarget"


def test_plan_report_lists_daily_targets() -> None:
    patient = make_patient(has_refeeding_risk=True)
    plan = build_nutrition_plan(patient)

    report = format_plan_report(patient, plan, echo_translator)
    lines = report.splitlines()

    assert "bmi: 24.2 kgm2 (normal)" in lines
    assert "day 1: 350 kcal, 22.8 g proteinGenitive" in lines
    assert "day 7: 2100 kcal, 105 g proteinGenitive" in lines
    assert lines[-3:] == ["", "refeedingWarning", "refeedingInstructions"]


def test_plan_report_adds_dialysis_lines_for_kidney_failure() -> None:
    patient = make_patient(has_kidney_failure=True)
    plan = build_nutrition_plan(patient)

    lines = format_plan_report(patient, plan, echo_translator).splitlines()

    assert "day 7: 2100 kcal, 84 g proteinGenitive" in lines
    assert "  ifDialysis: 126 g proteinGenitive" in lines
    assert "kidneyWarning" not in lines
