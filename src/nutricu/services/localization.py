"""Translation tables and the translator handed to report formatting."""

from collections.abc import Callable

from nutricu.domain.errors import UnsupportedLanguageError

Translator = Callable[[str], str]

DEFAULT_LANGUAGE = "ru"

TRANSLATIONS: dict[str, dict[str, str]] = {
    "ru": {
        "id": "ID",
        "patients": "Пациента",
        "gender": "Пол",
        "male": "Мужской",
        "female": "Женский",
        "age": "Возраст",
        "years": "лет",
        "height": "Рост",
        "cm": "см",
        "weight": "Вес",
        "actualWeight": "Фактический вес",
        "kg": "кг",
        "bmi": "ИМТ",
        "kgm2": "кг/м²",
        "severeDef": "Выраженный дефицит массы тела",
        "deficit": "Дефицит массы тела",
        "normal": "Норма",
        "overweight": "Избыточная масса тела",
        "obesity1": "Ожирение I степени",
        "obesity2": "Ожирение II степени",
        "obesity3": "Ожирение III степени",
        "idealWeight": "Идеальный вес",
        "adjustedWeight": "Скорректированный вес",
        "calculationWeight": "Вес для расчёта",
        "diabetes": "Сахарный диабет",
        "kidneyFailure": "Почечная недостаточность",
        "refeedingRisk": "Риск рефидинг-синдрома",
        "yes": "Да",
        "no": "Нет",
        "nutritionPlan": "План питания",
        "day": "День",
        "kcal": "ккал",
        "g": "г",
        "ml": "мл",
        "protein": "Белок",
        "proteinGenitive": "белка",
        "ifDialysis": "При диализе",
        "requirement": "Потребность",
        "volume": "Объём",
        "energy": "Энергия",
        "belowNorm": "ниже нормы",
        "aboveNorm": "выше нормы",
        "matchesNorm": "соответствует норме",
        "noTarget": "цель не определена",
        "refeedingWarning": "ВНИМАНИЕ: риск рефидинг-синдрома!",
        "refeedingInstructions": (
            "Наращивайте нутритивную поддержку постепенно, ежедневно "
            "контролируйте фосфор, калий и магний, назначьте тиамин до начала "
            "питания."
        ),
        "kidneyWarning": "ВНИМАНИЕ: почечная недостаточность!",
        "kidneyInstructions": (
            "Потребность в белке снижена на 20%. При проведении заместительной "
            "почечной терапии потребность в белке повышается на 20%."
        ),
    },
    "en": {
        "id": "ID",
        "patients": "Patient",
        "gender": "Gender",
        "male": "Male",
        "female": "Female",
        "age": "Age",
        "years": "years",
        "height": "Height",
        "cm": "cm",
        "weight": "Weight",
        "actualWeight": "Actual weight",
        "kg": "kg",
        "bmi": "BMI",
        "kgm2": "kg/m²",
        "severeDef": "Severe underweight",
        "deficit": "Underweight",
        "normal": "Normal",
        "overweight": "Overweight",
        "obesity1": "Obesity class I",
        "obesity2": "Obesity class II",
        "obesity3": "Obesity class III",
        "idealWeight": "Ideal weight",
        "adjustedWeight": "Adjusted weight",
        "calculationWeight": "Calculation weight",
        "diabetes": "Diabetes",
        "kidneyFailure": "Kidney failure",
        "refeedingRisk": "Refeeding risk",
        "yes": "Yes",
        "no": "No",
        "nutritionPlan": "Nutrition plan",
        "day": "Day",
        "kcal": "kcal",
        "g": "g",
        "ml": "ml",
        "protein": "Protein",
        "proteinGenitive": "protein",
        "ifDialysis": "If on dialysis",
        "requirement": "Requirement",
        "volume": "Volume",
        "energy": "Energy",
        "belowNorm": "below norm",
        "aboveNorm": "above norm",
        "matchesNorm": "matches norm",
        "noTarget": "no target",
        "refeedingWarning": "WARNING: risk of refeeding syndrome!",
        "refeedingInstructions": (
            "Advance feeding slowly, monitor phosphate, potassium and magnesium "
            "daily, and give thiamine before starting nutrition."
        ),
        "kidneyWarning": "WARNING: kidney failure!",
        "kidneyInstructions": (
            "Protein targets are reduced by 20%. If the patient is on renal "
            "replacement therapy, protein needs increase by 20%."
        ),
    },
}


def supported_languages() -> list[str]:
    """Return language codes with a translation table."""
    return sorted(TRANSLATIONS)


def get_translator(language: str = DEFAULT_LANGUAGE) -> Translator:
    """Return a key-to-text lookup for a language.

    Missing keys fall back to the key itself.
    """
    table = TRANSLATIONS.get(language)
    if table is None:
        raise UnsupportedLanguageError(f"Unsupported language: {language}")

    def translate(key: str) -> str:
        return table.get(key) or key

    return translate
