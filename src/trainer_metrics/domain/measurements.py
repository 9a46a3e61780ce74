"""Domain models for body measurements and derived composition."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class Gender(Enum):
    """Gender used to branch the anthropometric formulas."""

    MALE = "male"
    FEMALE = "female"


class BmiCategory(Enum):
    """BMI classification bands."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


class BodyFatCategory(Enum):
    """Body-fat classification bands."""

    ESSENTIAL = "essential"
    ATHLETIC = "athletic"
    FITNESS = "fitness"
    ACCEPTABLE = "acceptable"
    HIGH = "high"


class SkinfoldProtocol(Enum):
    """Jackson & Pollock skinfold protocols."""

    SEVEN_SITE = "seven_site"
    THREE_SITE = "three_site"


@dataclass(frozen=True)
class MeasurementSnapshot:
    """One point-in-time circumference measurement."""

    weight_kg: float
    height_cm: float
    age_years: int
    gender: Gender
    waist_cm: float
    neck_cm: float
    hip_cm: float | None = None
    measured_on: date | None = None


@dataclass(frozen=True)
class SkinfoldSnapshot:
    """One point-in-time skinfold measurement, folds in millimetres."""

    weight_kg: float
    height_cm: float
    age_years: int
    gender: Gender
    protocol: SkinfoldProtocol
    triceps_mm: float
    subscapular_mm: float
    thigh_mm: float
    chest_mm: float | None = None
    axillary_mm: float | None = None
    abdominal_mm: float | None = None
    suprailiac_mm: float | None = None
    measured_on: date | None = None


@dataclass(frozen=True)
class BodyCompositionResult:
    """Derived body composition metrics."""

    body_fat_percent: float
    fat_mass_kg: float
    lean_mass_kg: float
    bmr_kcal: int
    daily_calories_kcal: int
    bmi: float
    bmi_category: BmiCategory
