"""Domain models for enteral nutrition formulas."""

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator


@dataclass(frozen=True)
class Mixture:
    """Commercial nutrition formula with its nutrient density."""

    id: str
    name: str
    calories_per_1000ml: float
    protein_per_1000ml: float
    is_diabetic: bool = False
    is_semi_elemental: bool = False
    is_default: bool = False

    @property
    def calories_per_ml(self) -> float:
        return self.calories_per_1000ml / 1000

    @property
    def protein_per_ml(self) -> float:
        return self.protein_per_1000ml / 1000


class MixtureInput(BaseModel):
    """Validated mixture form payload."""

    name: str = Field(min_length=1)
    calories_per_1000ml: float = Field(gt=0)
    protein_per_1000ml: float = Field(gt=0)
    is_diabetic: bool = False
    is_semi_elemental: bool = False

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Mixture name is required")
        return cleaned
