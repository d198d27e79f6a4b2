"""Default mixture catalog seeded on first start."""

from collections.abc import Iterable

from nutricu.domain.mixtures import Mixture

DEFAULT_MIXTURES: tuple[Mixture, ...] = (
    Mixture("1", "Фрезубин интенсив", 1220, 100, False, True, True),
    Mixture("2", "Фрезубин ВП 2 ккал", 2000, 100, False, False, True),
    Mixture("3", "Фрезубин сипинг 2 ккал", 2000, 100, False, False, True),
    Mixture("4", "Фрезубин крем 2 ккал", 2000, 100, False, False, True),
    Mixture("5", "Пептамен интенс", 1000, 93, False, True, True),
    Mixture("6", "Пептамен АФ", 1520, 94, False, True, True),
    Mixture("7", "Ресурс диабет плюс (сипинг)", 1600, 90, True, False, True),
    Mixture("8", "Ресурс протеин (сипинг)", 1250, 94, False, False, True),
    Mixture("9", "Ресурс 2,0", 2000, 90, False, False, True),
    Mixture("10", "Новасурс диабет плюс", 1230, 59.2, True, False, True),
    Mixture("11", "Нутризон Эдванст Диазон", 1030, 43, True, False, True),
    Mixture("12", "Нутризон Диазон НЕНР", 1500, 77, True, False, True),
)

# First id handed out when the collection is empty.
FIRST_USER_MIXTURE_ID = "13"


def missing_defaults(existing: Iterable[Mixture]) -> list[Mixture]:
    """Return catalog entries whose ids are absent from ``existing``."""
    existing_ids = {mixture.id for mixture in existing}
    return [mixture for mixture in DEFAULT_MIXTURES if mixture.id not in existing_ids]


def next_mixture_id(existing: Iterable[Mixture]) -> str:
    """Return the next sequential id: highest numeric id plus one."""
    numeric_ids = [int(mixture.id) for mixture in existing if mixture.id.isdigit()]
    if not numeric_ids:
        return FIRST_USER_MIXTURE_ID
    return str(max(numeric_ids) + 1)
