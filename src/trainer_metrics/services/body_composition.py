"""Body composition engine.

Turns a measurement snapshot into body-fat percentage, fat and lean mass, BMI,
basal metabolic rate and estimated daily energy expenditure. Two methods are
supported: the US Navy circumference method and the Jackson & Pollock
skinfold method with the Siri conversion.
"""

import logging
import math

from trainer_metrics.domain.errors import InvalidMeasurement
from trainer_metrics.domain.measurements import (
    BmiCategory,
    BodyCompositionResult,
    BodyFatCategory,
    Gender,
    MeasurementSnapshot,
    SkinfoldProtocol,
    SkinfoldSnapshot,
)

MODERATE_ACTIVITY_FACTOR = 1.55
MAX_BODY_FAT_PERCENT = 50.0
MIN_BODY_FAT_PERCENT = 3.0
MIN_FEMALE_SKINFOLD_BODY_FAT_PERCENT = 12.0

_BMI_UNDERWEIGHT = 18.5
_BMI_OVERWEIGHT = 25.0
_BMI_OBESE = 30.0

# Upper bounds (exclusive) for essential, athletic, fitness and acceptable.
_BODY_FAT_BANDS = {
    Gender.MALE: (6.0, 14.0, 18.0, 25.0),
    Gender.FEMALE: (14.0, 21.0, 25.0, 32.0),
}

_SKINFOLD_SUM_RANGES = {
    SkinfoldProtocol.SEVEN_SITE: (20.0, 200.0),
    SkinfoldProtocol.THREE_SITE: (10.0, 100.0),
}

# (intercept, sum, sum squared, age) coefficients for body density.
_DENSITY_COEFFICIENTS = {
    (SkinfoldProtocol.SEVEN_SITE, Gender.MALE): (
        1.112,
        0.00043499,
        0.00000055,
        0.00028826,
    ),
    (SkinfoldProtocol.SEVEN_SITE, Gender.FEMALE): (
        1.097,
        0.00046971,
        0.00000056,
        0.00012828,
    ),
    (SkinfoldProtocol.THREE_SITE, Gender.MALE): (
        1.10938,
        0.0008267,
        0.0000016,
        0.0002574,
    ),
    (SkinfoldProtocol.THREE_SITE, Gender.FEMALE): (
        1.0994921,
        0.0009929,
        0.0000023,
        0.0001392,
    ),
}

_logger = logging.getLogger(__name__)


def compute_composition(snapshot: MeasurementSnapshot) -> BodyCompositionResult:
    """Compute body composition from circumferences (US Navy method)."""
    _validate_common(
        snapshot.weight_kg, snapshot.height_cm, snapshot.age_years, snapshot.gender
    )
    _require_positive("waist_cm", snapshot.waist_cm)
    _require_positive("neck_cm", snapshot.neck_cm)
    if snapshot.hip_cm is not None:
        _require_positive("hip_cm", snapshot.hip_cm)

    raw_body_fat = navy_body_fat_percent(snapshot)
    body_fat = clamp_body_fat(raw_body_fat, MIN_BODY_FAT_PERCENT)
    bmr = mifflin_st_jeor_bmr(
        snapshot.weight_kg, snapshot.height_cm, snapshot.age_years, snapshot.gender
    )
    return _build_result(snapshot.weight_kg, snapshot.height_cm, body_fat, bmr)


def compute_skinfold_composition(snapshot: SkinfoldSnapshot) -> BodyCompositionResult:
    """Compute body composition from skinfolds (Jackson & Pollock + Siri)."""
    _validate_common(
        snapshot.weight_kg, snapshot.height_cm, snapshot.age_years, snapshot.gender
    )
    total = skinfold_sum(snapshot)
    low, high = _SKINFOLD_SUM_RANGES[snapshot.protocol]
    if not low <= total <= high:
        raise InvalidMeasurement(
            "skinfolds",
            f"sum {total:g} mm outside the realistic range {low:g}-{high:g} mm",
        )

    density = body_density(
        total, snapshot.age_years, snapshot.gender, snapshot.protocol
    )
    minimum = (
        MIN_BODY_FAT_PERCENT
        if snapshot.gender is Gender.MALE
        else MIN_FEMALE_SKINFOLD_BODY_FAT_PERCENT
    )
    body_fat = clamp_body_fat(siri_body_fat_percent(density), minimum)
    bmr = harris_benedict_bmr(
        snapshot.weight_kg, snapshot.height_cm, snapshot.age_years, snapshot.gender
    )
    return _build_result(snapshot.weight_kg, snapshot.height_cm, body_fat, bmr)


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Return the unrounded body mass index."""
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def bmi_category(bmi: float) -> BmiCategory:
    """Classify a BMI value."""
    if bmi < _BMI_UNDERWEIGHT:
        return BmiCategory.UNDERWEIGHT
    if bmi < _BMI_OVERWEIGHT:
        return BmiCategory.NORMAL
    if bmi < _BMI_OBESE:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


def body_fat_category(body_fat_percent: float, gender: Gender) -> BodyFatCategory:
    """Classify a body-fat percentage for the given gender."""
    essential, athletic, fitness, acceptable = _BODY_FAT_BANDS[Gender(gender)]
    if body_fat_percent < essential:
        return BodyFatCategory.ESSENTIAL
    if body_fat_percent < athletic:
        return BodyFatCategory.ATHLETIC
    if body_fat_percent < fitness:
        return BodyFatCategory.FITNESS
    if body_fat_percent < acceptable:
        return BodyFatCategory.ACCEPTABLE
    return BodyFatCategory.HIGH


def navy_body_fat_percent(snapshot: MeasurementSnapshot) -> float:
    """Return the unclamped US Navy body-fat estimate.

    Circumferences and height are taken in centimetres. When a female
    snapshot has no hip measurement the waist is used in its place.
    """
    if snapshot.gender is Gender.MALE:
        span = snapshot.waist_cm - snapshot.neck_cm
        if span <= 0:
            raise InvalidMeasurement("waist_cm", "must be greater than neck_cm")
        return (
            86.010 * math.log10(span) - 70.041 * math.log10(snapshot.height_cm) + 36.76
        )

    hip = snapshot.hip_cm
    if hip is None:
        _logger.debug("No hip measurement, falling back to waist")
        hip = snapshot.waist_cm
    span = snapshot.waist_cm + hip - snapshot.neck_cm
    if span <= 0:
        raise InvalidMeasurement(
            "waist_cm", "waist plus hip must be greater than neck_cm"
        )
    return (
        163.205 * math.log10(span)
        - 97.684 * math.log10(snapshot.height_cm)
        - 78.387
    )


def clamp_body_fat(
    body_fat_percent: float, minimum: float = MIN_BODY_FAT_PERCENT
) -> float:
    """Clamp a body-fat estimate to the range where the formulas are valid."""
    clamped = max(minimum, min(MAX_BODY_FAT_PERCENT, body_fat_percent))
    if clamped != body_fat_percent:
        _logger.debug("Body fat %.2f%% clamped to %.1f%%", body_fat_percent, clamped)
    return clamped


def mifflin_st_jeor_bmr(
    weight_kg: float, height_cm: float, age_years: int, gender: Gender
) -> float:
    """Return BMR in kcal/day from the Mifflin-St Jeor form used by the product."""
    base = 10 * weight_kg + 6.25 * height_cm + 5 * age_years
    if gender is Gender.MALE:
        return base + 5
    return base - 161


def harris_benedict_bmr(
    weight_kg: float, height_cm: float, age_years: int, gender: Gender
) -> float:
    """Return BMR in kcal/day from the revised Harris-Benedict equation."""
    if gender is Gender.MALE:
        return 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age_years
    return 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.330 * age_years


def daily_calories(bmr_kcal: int) -> int:
    """Scale a rounded BMR by the moderate activity factor."""
    return int(round_half_up(bmr_kcal * MODERATE_ACTIVITY_FACTOR))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals with exact halves rounded up."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def skinfold_sum(snapshot: SkinfoldSnapshot) -> float:
    """Sum the skinfold sites required by the snapshot's protocol."""
    sites = {
        "triceps_mm": snapshot.triceps_mm,
        "subscapular_mm": snapshot.subscapular_mm,
        "thigh_mm": snapshot.thigh_mm,
    }
    if snapshot.protocol is SkinfoldProtocol.SEVEN_SITE:
        sites.update(
            chest_mm=snapshot.chest_mm,
            axillary_mm=snapshot.axillary_mm,
            abdominal_mm=snapshot.abdominal_mm,
            suprailiac_mm=snapshot.suprailiac_mm,
        )
    total = 0.0
    for name, value in sites.items():
        if value is None:
            raise InvalidMeasurement(name, "required by the selected protocol")
        if value < 0:
            raise InvalidMeasurement(name, "must not be negative")
        total += value
    return total


def body_density(
    skinfold_total_mm: float,
    age_years: int,
    gender: Gender,
    protocol: SkinfoldProtocol,
) -> float:
    """Return body density (g/cm3) from a skinfold sum."""
    intercept, linear, quadratic, age_factor = _DENSITY_COEFFICIENTS[
        (SkinfoldProtocol(protocol), Gender(gender))
    ]
    return (
        intercept
        - linear * skinfold_total_mm
        + quadratic * skinfold_total_mm * skinfold_total_mm
        - age_factor * age_years
    )


def siri_body_fat_percent(density: float) -> float:
    """Convert body density to body-fat percentage (Siri, 1961)."""
    return (4.95 / density - 4.5) * 100


def _build_result(
    weight_kg: float, height_cm: float, body_fat_percent: float, bmr: float
) -> BodyCompositionResult:
    fat_mass = round_half_up(weight_kg * body_fat_percent / 100, 1)
    # Lean mass comes from the rounded values so the two still sum to weight.
    lean_mass = round_half_up(round_half_up(weight_kg, 1) - fat_mass, 1)
    bmi = calculate_bmi(weight_kg, height_cm)
    bmr_kcal = int(round_half_up(bmr))
    return BodyCompositionResult(
        body_fat_percent=round_half_up(body_fat_percent, 1),
        fat_mass_kg=fat_mass,
        lean_mass_kg=lean_mass,
        bmr_kcal=bmr_kcal,
        daily_calories_kcal=daily_calories(bmr_kcal),
        bmi=round_half_up(bmi, 1),
        bmi_category=bmi_category(bmi),
    )


def _validate_common(
    weight_kg: float, height_cm: float, age_years: int, gender: Gender
) -> None:
    _require_positive("weight_kg", weight_kg)
    _require_positive("height_cm", height_cm)
    if not math.isfinite(age_years) or age_years < 0:
        raise InvalidMeasurement("age_years", "must not be negative")
    if not isinstance(gender, Gender):
        raise InvalidMeasurement("gender", f"unknown value {gender!r}")


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidMeasurement(name, "must be a positive number")
