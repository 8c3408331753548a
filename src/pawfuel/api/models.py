"""Pydantic models for API request payloads."""

from typing import Literal

from pydantic import BaseModel, Field

from pawfuel.domain.dogs import BodyCondition, EnergyLevel
from pawfuel.domain.inventory import EventType
from pawfuel.domain.products import ProductCategory


class DogUpdate(BaseModel):
    """Partial dog profile update."""

    name: str | None = None
    breed: str | None = None
    sex: str | None = None
    weight_kg: float | None = None
    age_years: float | None = None
    energy: EnergyLevel | None = None
    body_condition: BodyCondition | None = None
    allergies: str | list[str] | None = None


class OnboardingRequest(BaseModel):
    """Onboarding answers."""

    weight_kg: float
    age_years: float
    energy: EnergyLevel = "normal"
    allergies: str | list[str] = ""
    consent: bool = False


class InventoryEventRequest(BaseModel):
    """Receive or consume packs of a product."""

    product_id: str
    type: EventType
    packs: float


class MacroSplitPayload(BaseModel):
    """Muscle/organ/bone fractions."""

    muscle: float
    organ: float
    bone: float


class ProductCreate(BaseModel):
    """User-defined product."""

    name: str
    grams_per_pack: float
    category: ProductCategory = "raw"
    protein: str = "none"
    brand: str = "Custom"
    macros: MacroSplitPayload | None = None


class StoolPhotoRequest(BaseModel):
    """Base64 encoded stool photo."""

    image_base64: str
    keep_image: bool = True


class OrderItemPayload(BaseModel):
    """Requested quantity of a product."""

    product_id: str
    quantity: int = Field(ge=0)


class OrderRequest(BaseModel):
    """Manual order."""

    items: list[OrderItemPayload]


class ScheduleRequest(BaseModel):
    """Weekly recurring order."""

    day: str
    time: str = "09:00"
    items: list[OrderItemPayload]


class PreferencesUpdate(BaseModel):
    """Owner preference changes."""

    preferred_branch: Literal["lebanon", "cyprus"] | None = None
    language: str | None = None


class Credentials(BaseModel):
    """Local account credentials."""

    email: str
    password: str
