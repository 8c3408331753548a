"""Daily feeding target calculation."""

from pawfuel.domain.dogs import DogProfile
from pawfuel.domain.meals import FeedingTarget

PUPPY_AGE_YEARS = 0.5
ADULT_AGE_YEARS = 1.0
PUPPY_FRACTION = 0.06
JUNIOR_FRACTION = 0.04
ADULT_FRACTION = 0.025
ADJUSTMENT = 0.005
MIN_FRACTION = 0.02
MAX_FRACTION = 0.06

MUSCLE_SHARE = 0.80
ORGAN_SHARE = 0.10
BONE_SHARE = 0.10


def compute_feeding_fraction(dog: DogProfile) -> float:
    """Return the share of body weight to feed per day (0.02-0.06)."""
    if dog.age_years < PUPPY_AGE_YEARS:
        fraction = PUPPY_FRACTION
    elif dog.age_years < ADULT_AGE_YEARS:
        fraction = JUNIOR_FRACTION
    else:
        fraction = ADULT_FRACTION

    if dog.body_condition == "lean":
        fraction += ADJUSTMENT
    elif dog.body_condition == "overweight":
        fraction -= ADJUSTMENT

    if dog.energy == "high":
        fraction += ADJUSTMENT
    elif dog.energy == "low":
        fraction -= ADJUSTMENT

    return min(max(fraction, MIN_FRACTION), MAX_FRACTION)


def compute_feeding_target(dog: DogProfile) -> FeedingTarget:
    """Return the daily gram target with its 80/10/10 macro split."""
    fraction = compute_feeding_fraction(dog)
    grams = dog.weight_kg * fraction * 1000
    return FeedingTarget(
        fraction=fraction,
        grams=grams,
        muscle_g=grams * MUSCLE_SHARE,
        organ_g=grams * ORGAN_SHARE,
        bone_g=grams * BONE_SHARE,
    )
