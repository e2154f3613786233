"""Breakpoint mapping superseded by the ratio/plateau mapping in ``equivalence``.

Each control point of the birth quality curve is moved into the subject's
biological years: 14, 15 and 20 scale with the maturation ratio; 30, 40 and 65
with the lifespan ratio. A biological age is interpolated back between the
moved breakpoints.
"""

from birth_quality.domain.age_profile import AgeProfile, ReferenceProfile

_GROWTH_AGES = (14.0, 15.0, 20.0)
_DECLINE_AGES = (30.0, 40.0, 65.0)
HUMAN_BREAKPOINTS = _GROWTH_AGES + _DECLINE_AGES


def legacy_breakpoints(mature_ratio: float, lifespan_ratio: float) -> tuple[float, ...]:
    """Biological-age breakpoints, forced non-decreasing."""
    raw = [age * mature_ratio for age in _GROWTH_AGES] + [age * lifespan_ratio for age in _DECLINE_AGES]
    points: list[float] = []
    for value in raw:
        points.append(max(value, points[-1]) if points else value)
    return tuple(points)


def legacy_equivalent_age(profile: AgeProfile, reference: ReferenceProfile) -> float:
    bio_age = profile.biological_age
    if (
        profile.race_maturation_age <= 0.0
        or profile.race_lifespan <= 0.0
        or reference.maturation_age <= 0.0
        or reference.lifespan <= 0.0
    ):
        return bio_age

    mature_ratio = profile.race_maturation_age / reference.maturation_age
    lifespan_ratio = profile.race_lifespan / reference.lifespan
    points = legacy_breakpoints(mature_ratio, lifespan_ratio)

    if bio_age <= points[0]:
        return HUMAN_BREAKPOINTS[0] - (points[0] - bio_age) / mature_ratio

    for i in range(len(points) - 1):
        lo, hi = points[i], points[i + 1]
        if bio_age <= hi:
            width = hi - lo
            if width <= 0.01:
                return HUMAN_BREAKPOINTS[i]
            progress = (bio_age - lo) / width
            return HUMAN_BREAKPOINTS[i] + progress * (HUMAN_BREAKPOINTS[i + 1] - HUMAN_BREAKPOINTS[i])

    return HUMAN_BREAKPOINTS[-1] + (bio_age - points[-1]) / lifespan_ratio
