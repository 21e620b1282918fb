import dataclasses
import enum
from typing import Optional


class Category(str, enum.Enum):
    """Coarse ingredient category, declared in display order."""

    PROTEINS = "proteins"
    VEGETABLES = "vegetables"
    DAIRY = "dairy"
    PANTRY = "pantry"
    SPICES = "spices"
    LIQUIDS = "liquids"
    OTHER = "other"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]

    @property
    def display_rank(self) -> int:
        return list(Category).index(self)


CATEGORY_LABELS = {
    Category.PROTEINS: "proteins",
    Category.VEGETABLES: "vegetables",
    Category.DAIRY: "dairy",
    Category.PANTRY: "pantry",
    Category.SPICES: "spices & herbs",
    Category.LIQUIDS: "liquids",
    Category.OTHER: "other",
}


class MeasurementSystem(str, enum.Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


@dataclasses.dataclass(frozen=True)
class MeasurementReading:
    """A quantity in one unit, e.g. ``(450, "g")``. Empty unit means a count."""

    value: float
    unit: str = ""


@dataclasses.dataclass(frozen=True)
class StructuredIngredient:
    description: str
    metric: Optional[MeasurementReading] = None
    imperial: Optional[MeasurementReading] = None
    original_system: Optional[MeasurementSystem] = None
    category: Category = Category.OTHER
    section: Optional[str] = None  # visible sub-heading, e.g. "For the marinade"
