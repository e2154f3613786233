"""Human-equivalent age for the birth quality curve.

A subject's biological age is remapped onto the human aging timescale in three
segments around the curve's peak plateau (human ages 20 to 30):

- Growth: ages up to the scaled peak start shrink by the maturation ratio.
- Plateau: ages inside the scaled plateau interpolate linearly onto 20..30.
- Decline: ages past the scaled peak end shrink by the lifespan ratio.

The peak start scales with maturation (race adult age / human adult age) and
the peak end with lifespan (race life expectancy / human life expectancy).
The result always passes through (bio_peak_start, 20) and (bio_peak_end, 30).
"""

import logging

from birth_quality.domain.age_profile import AgeProfile, ReferenceProfile
from birth_quality.domain.species import Species
from birth_quality.domain.subject import Subject
from birth_quality.legacy import legacy_equivalent_age
from birth_quality.settings import BirthQualitySettings, MappingVariant

logger = logging.getLogger(__name__)

PEAK_START = 20.0
PEAK_END = 30.0
DEFAULT_MATURATION_AGE = 18.0
MIN_PLATEAU_WIDTH = 0.01


def resolve_reference(human: Species) -> ReferenceProfile:
    """Build the human baseline, falling back to adulthood at 18."""
    maturation_age = human.adult_min_age
    if maturation_age is None:
        maturation_age = DEFAULT_MATURATION_AGE
    return ReferenceProfile(maturation_age=maturation_age, lifespan=human.life_expectancy)


def profile_for(subject: Subject) -> AgeProfile:
    maturation_age = subject.species.adult_min_age
    if maturation_age is None or maturation_age <= 0.0:
        maturation_age = DEFAULT_MATURATION_AGE
    return AgeProfile(
        biological_age=subject.biological_age,
        race_maturation_age=maturation_age,
        race_lifespan=subject.species.life_expectancy,
    )


def _has_valid_denominators(profile: AgeProfile, reference: ReferenceProfile) -> bool:
    return (
        profile.race_maturation_age > 0.0
        and profile.race_lifespan > 0.0
        and reference.maturation_age > 0.0
        and reference.lifespan > 0.0
    )


def peak_window(mature_ratio: float, lifespan_ratio: float, settings: BirthQualitySettings) -> tuple[float, float]:
    """Return the (start, end) of the peak plateau in the subject's biological years."""
    bio_peak_start = PEAK_START * mature_ratio
    bio_peak_end = PEAK_END * lifespan_ratio

    if settings.prevent_short_lifespan_penalty and lifespan_ratio < 1.0:
        # Keep at least the human plateau width past the scaled peak start
        guaranteed_end = bio_peak_start + (PEAK_END - PEAK_START)
        bio_peak_end = max(bio_peak_end, guaranteed_end)

    bio_peak_end = max(bio_peak_end, bio_peak_start)
    return bio_peak_start, bio_peak_end


def human_equivalent_age(
    profile: AgeProfile,
    reference: ReferenceProfile,
    settings: BirthQualitySettings,
    is_ageless: bool = False,
) -> float:
    """Map a biological age onto the human-equivalent age.

    Args:
        profile: The subject's biological age and its species' maturation age and lifespan.
        reference: The human maturation age and lifespan.
        settings: Short-lifespan and ageless handling flags.
        is_ageless: Whether the subject's biological age never advances.

    Returns:
        The human-equivalent age. Non-positive maturation ages or lifespans on
        either side return the biological age unchanged.
    """
    bio_age = profile.biological_age
    if not _has_valid_denominators(profile, reference):
        logger.debug("Non-positive maturation age or lifespan in %s / %s, passing age through", profile, reference)
        return bio_age

    mature_ratio = profile.race_maturation_age / reference.maturation_age
    lifespan_ratio = profile.race_lifespan / reference.lifespan

    if is_ageless and settings.ageless_at_peak_birth_quality:
        return min(bio_age, PEAK_END)

    bio_peak_start, bio_peak_end = peak_window(mature_ratio, lifespan_ratio, settings)

    if bio_age <= bio_peak_start:
        logger.debug("Age %.2f in growth segment (peak start %.2f)", bio_age, bio_peak_start)
        return bio_age / mature_ratio

    if bio_age >= bio_peak_end:
        logger.debug("Age %.2f in decline segment (peak end %.2f)", bio_age, bio_peak_end)
        return PEAK_END + (bio_age - bio_peak_end) / lifespan_ratio

    width = bio_peak_end - bio_peak_start
    if width <= MIN_PLATEAU_WIDTH:
        return PEAK_START

    progress = (bio_age - bio_peak_start) / width
    return PEAK_START + progress * (PEAK_END - PEAK_START)


def equivalent_age_for(subject: Subject | None, human: Species, settings: BirthQualitySettings) -> float:
    """Human-equivalent age of a subject, using the configured mapping variant."""
    if subject is None:
        return 0.0

    profile = profile_for(subject)
    reference = resolve_reference(human)

    if settings.variant is MappingVariant.LEGACY:
        return legacy_equivalent_age(profile, reference)
    return human_equivalent_age(profile, reference, settings, is_ageless=subject.is_ageless)
