"""Seed data for a fresh install."""

from datetime import datetime, timedelta

from pawfuel.domain.dogs import DogProfile
from pawfuel.domain.inventory import InventoryEvent
from pawfuel.domain.products import MacroSplit, Product
from pawfuel.domain.state import AppState
from pawfuel.services.ids import new_id

_BRAND = "Royal Barf"

_WHOLE = (0.80, 0.10, 0.10)
_ORGAN = (0.0, 1.0, 0.0)
_MUSCLE = (1.0, 0.0, 0.0)
_BONE = (0.0, 0.0, 1.0)
_EMPTY = (0.0, 0.0, 0.0)

# id, name, grams per pack, category, protein, (muscle, organ, bone)
_PRODUCT_ROWS: list[tuple[str, str, float, str, str, tuple[float, float, float]]] = [
    ("trio1kg", "Trio Pack 1kg", 1000, "raw", "mixed", (0.70, 0.15, 0.15)),
    ("duo400g", "Duo Pack 400g", 400, "raw", "mixed", (0.75, 0.15, 0.10)),
    ("rabbitWhole230", "Whole Rabbit 230g", 230, "raw", "rabbit", _WHOLE),
    ("duckWhole230", "Whole Duck 230g", 230, "raw", "duck", _WHOLE),
    ("turkeyWhole230", "Whole Turkey 230g", 230, "raw", "turkey", _WHOLE),
    (
        "lambBeefBoneless230",
        "Boneless Lamb & Beef 230g",
        230,
        "raw",
        "lambBeef",
        (0.90, 0.05, 0.05),
    ),
    ("chickenWhole230", "Whole Chicken 230g", 230, "raw", "chicken", _WHOLE),
    ("salmonWhole230", "Whole Salmon 230g", 230, "raw", "salmon", _WHOLE),
    ("beefHeartChips85", "Beef Heart Chips 85g", 85, "treat", "beef", _ORGAN),
    ("chickenHeart90", "Chicken Heart 90g", 90, "treat", "chicken", _ORGAN),
    ("sardines30", "Whole Sardines 30g", 30, "treat", "fish", _MUSCLE),
    ("beefTripe140", "Beef Tripe 140g", 140, "treat", "beef", _ORGAN),
    ("chickenFeet15", "Chicken Feet (15 pcs)", 15, "treat", "chicken", _BONE),
    ("duckNecksSmall", "Duck Necks (Small)", 1, "treat", "duck", _BONE),
    ("tuna30", "Tuna 30g", 30, "treat", "tuna", _MUSCLE),
    ("berryFusion200", "Berry Fusion 200g", 200, "supplement", "none", _EMPTY),
    ("spirulina200", "Organic Spirulina 200g", 200, "supplement", "none", _EMPTY),
    ("eggshellPowder200", "Eggshell Powder 200g", 200, "supplement", "none", _BONE),
    ("boneBroth", "Bone Broth 250g", 250, "pantry", "broth", _EMPTY),
]

# product id, packs received on first launch
_SEED_STOCK: list[tuple[str, float]] = [
    ("trio1kg", 2),
    ("duo400g", 2),
    ("rabbitWhole230", 2),
    ("duckWhole230", 2),
    ("turkeyWhole230", 2),
    ("lambBeefBoneless230", 2),
    ("chickenWhole230", 2),
    ("salmonWhole230", 2),
    ("boneBroth", 2),
    ("berryFusion200", 1),
    ("beefHeartChips85", 1),
]


def default_products() -> dict[str, Product]:
    """Return the built-in product catalog keyed by id."""
    products: dict[str, Product] = {}
    for product_id, name, grams, category, protein, macros in _PRODUCT_ROWS:
        brand = "Homemade" if product_id == "boneBroth" else _BRAND
        products[product_id] = Product(
            id=product_id,
            name=name,
            brand=brand,
            grams_per_pack=grams,
            category=category,  # type: ignore[arg-type]
            protein=protein,
            macros=MacroSplit(*macros),
            pantry=category != "raw",
        )
    return products


def build_default_state(now: datetime, founder_pro_days: int = 365) -> AppState:
    """Return the first-launch state: one dog, the catalog and some stock."""
    dog = DogProfile(
        id="dog1",
        name="Killer",
        breed="Mixed",
        sex="Male",
        weight_kg=25,
        age_years=4,
        energy="normal",
        body_condition="ideal",
        created_at=now,
        updated_at=now,
    )
    events = [
        InventoryEvent(
            id=new_id("ev_"),
            product_id=product_id,
            timestamp=now,
            type="receive",
            packs=packs,
        )
        for product_id, packs in _SEED_STOCK
    ]
    return AppState(
        dogs=[dog],
        active_dog_id=dog.id,
        products=default_products(),
        inventory_events=events,
        pro_expiry=now + timedelta(days=founder_pro_days),
    )
