"""Product catalog domain models."""

from dataclasses import dataclass
from typing import Literal

ProductCategory = Literal["raw", "treat", "supplement", "pantry"]

NON_MATCHING_PROTEINS = frozenset({"none", "mixed"})
BROTH_PROTEIN = "broth"


@dataclass(frozen=True)
class MacroSplit:
    """Muscle/organ/bone composition as fractions of weight."""

    muscle: float
    organ: float
    bone: float


ZERO_MACROS = MacroSplit(muscle=0.0, organ=0.0, bone=0.0)


@dataclass(frozen=True)
class Product:
    """A purchasable food product sold in fixed-size packs."""

    id: str
    name: str
    brand: str
    grams_per_pack: float
    category: ProductCategory
    protein: str
    macros: MacroSplit
    pantry: bool
    ingredients: str | None = None

    def matches_allergy(self, allergies: set[str]) -> bool:
        """Return True when the protein tag is one of the given allergies."""
        tag = (self.protein or "").strip().lower()
        if not tag or tag in NON_MATCHING_PROTEINS:
            return False
        return tag in allergies

    @property
    def is_broth(self) -> bool:
        return (self.protein or "").strip().lower() == BROTH_PROTEIN


@dataclass(frozen=True)
class CatalogListing:
    """Orderable listing from the shop catalogue."""

    id: str
    name: str
    category: str
    size: str
    price: float | None
    currency: str
    description: str
