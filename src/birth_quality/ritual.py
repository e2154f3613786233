"""Birth ritual outcome hooks.

Each hook takes the value the host computed ("vanilla") and returns either
that value untouched or a replacement built from the mother's
human-equivalent age. Only the mother role is adjusted, and a baseline human
who ages normally keeps the vanilla value.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from birth_quality.curve import BIRTH_QUALITY_CURVE, SimpleCurve
from birth_quality.domain.quality_factor import QualityFactor
from birth_quality.domain.species import Species
from birth_quality.domain.subject import Subject
from birth_quality.equivalence import equivalent_age_for
from birth_quality.settings import BirthQualitySettings

logger = logging.getLogger(__name__)

MOTHER_ROLE = "mother"
_PAWN_PLACEHOLDER = "{PAWN}"


@dataclass(frozen=True)
class PawnAgeOutcome:
    role_id: str
    label: str  # may reference the subject as {PAWN}
    curve: SimpleCurve = BIRTH_QUALITY_CURVE


def _adjusted_subject(outcome: PawnAgeOutcome, roles: Mapping[str, Subject] | None, human: Species) -> Subject | None:
    if outcome.role_id != MOTHER_ROLE:
        return None

    subject = roles.get(MOTHER_ROLE) if roles is not None else None
    if subject is None:
        return None

    if subject.species.name == human.name and subject.biological_age_tick_factor == 1.0:
        logger.debug("%s is a normally aging %s, keeping vanilla value", subject.name, human.name)
        return None
    return subject


def _format_label(label: str, subject: Subject, *, capitalize: bool = False) -> str:
    text = label.replace(_PAWN_PLACEHOLDER, subject.name)
    if capitalize:
        text = text[:1].upper() + text[1:]
    return text


def _round_half_away(value: float, places: int = 0, *, scale: int = 0) -> Decimal:
    """Round ``value * 10**scale`` to ``places`` decimals, halves away from zero."""
    exponent = Decimal(1).scaleb(-places)
    return Decimal(str(value)).scaleb(scale).quantize(exponent, rounding=ROUND_HALF_UP)


def _signed_percent(value: float) -> str:
    """Percent with up to one decimal, '+' prefixed when positive."""
    text = str(_round_half_away(value, 1, scale=2)).rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return f"+{text}%" if value > 0.0 else f"{text}%"


def adjusted_count(
    vanilla: float,
    outcome: PawnAgeOutcome,
    roles: Mapping[str, Subject] | None,
    human: Species,
    settings: BirthQualitySettings,
) -> float:
    subject = _adjusted_subject(outcome, roles, human)
    if subject is None:
        return vanilla
    return equivalent_age_for(subject, human, settings)


def describe(
    vanilla: str,
    outcome: PawnAgeOutcome,
    roles: Mapping[str, Subject] | None,
    human: Species,
    settings: BirthQualitySettings,
) -> str:
    subject = _adjusted_subject(outcome, roles, human)
    if subject is None:
        return vanilla

    equivalent_age = equivalent_age_for(subject, human, settings)
    quality = outcome.curve.evaluate(equivalent_age)
    sign = "" if quality < 0.0 else "+"
    percent = _round_half_away(quality, scale=2)
    return f"{_format_label(outcome.label, subject, capitalize=True)}: {sign}{percent}% quality."


def quality_factor(
    vanilla: QualityFactor | None,
    outcome: PawnAgeOutcome,
    roles: Mapping[str, Subject] | None,
    human: Species,
    settings: BirthQualitySettings,
) -> QualityFactor | None:
    if vanilla is None:
        return None

    subject = _adjusted_subject(outcome, roles, human)
    if subject is None:
        return vanilla

    equivalent_age = equivalent_age_for(subject, human, settings)
    quality = outcome.curve.evaluate(equivalent_age)
    logger.debug(
        "%s: biological age %.2f -> equivalent age %.2f, quality %.3f",
        subject.name,
        subject.biological_age,
        equivalent_age,
        quality,
    )

    if quality > 0.0:
        quality_change = _signed_percent(quality)
    else:
        quality_change = f"+0 / {_signed_percent(quality)}"

    return QualityFactor(
        label=_format_label(outcome.label, subject),
        quality=quality,
        positive=quality > 0.0,
        count=f"{_round_half_away(equivalent_age)} (actual: {subject.biological_years})",
        quality_change=quality_change,
    )
