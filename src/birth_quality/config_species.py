import logging
import tomllib
from pathlib import Path
from typing import Any

from birth_quality.domain.species import DevelopmentalStage, LifeStage, Species
from birth_quality.exceptions import BirthQualityException

logger = logging.getLogger(__name__)

HUMAN_SPECIES_NAME = "human"


class SpeciesConfigError(BirthQualityException):
    """Raised when species configuration is invalid or missing."""


def _stages(*pairs: tuple[DevelopmentalStage, float]) -> tuple[LifeStage, ...]:
    return tuple(LifeStage(stage=stage, min_age=min_age) for stage, min_age in pairs)


HUMAN = Species(
    name=HUMAN_SPECIES_NAME,
    life_expectancy=80.0,
    life_stages=_stages(
        (DevelopmentalStage.BABY, 0.0),
        (DevelopmentalStage.CHILD, 3.0),
        (DevelopmentalStage.ADULT, 18.0),
    ),
)

BUILTIN_SPECIES: dict[str, Species] = {
    HUMAN.name: HUMAN,
    # Short-lived, early maturing
    "kobold": Species(
        name="kobold",
        life_expectancy=40.0,
        life_stages=_stages(
            (DevelopmentalStage.BABY, 0.0),
            (DevelopmentalStage.CHILD, 2.0),
            (DevelopmentalStage.ADULT, 9.0),
        ),
    ),
    # Slow maturing, long-lived
    "elf": Species(
        name="elf",
        life_expectancy=800.0,
        life_stages=_stages(
            (DevelopmentalStage.BABY, 0.0),
            (DevelopmentalStage.CHILD, 10.0),
            (DevelopmentalStage.ADULT, 100.0),
        ),
    ),
    # Human maturation, long life
    "dwarf": Species(
        name="dwarf",
        life_expectancy=250.0,
        life_stages=_stages(
            (DevelopmentalStage.BABY, 0.0),
            (DevelopmentalStage.CHILD, 4.0),
            (DevelopmentalStage.ADULT, 18.0),
        ),
    ),
}


# -- Parsing -----------------------------------------------------------------


def _require_field(raw: dict[str, Any], field: str, context: str) -> Any:
    if field not in raw:
        raise SpeciesConfigError(f"{context}: missing required field '{field}'")
    return raw[field]


def _require_number(value: Any, field: str, context: str) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise SpeciesConfigError(f"{context}: field '{field}' must be a number, got {value!r}")
    return float(value)


def parse_life_stage(raw: dict[str, Any], context: str) -> LifeStage:
    if not isinstance(raw, dict):
        raise SpeciesConfigError(f"{context}: each life stage must be a table")
    raw_stage = _require_field(raw, "stage", context)
    try:
        stage = DevelopmentalStage(raw_stage)
    except ValueError:
        raise SpeciesConfigError(f"{context}: invalid stage '{raw_stage}'")

    min_age = _require_number(_require_field(raw, "min_age", context), "min_age", context)
    return LifeStage(stage=stage, min_age=min_age)


def parse_species(name: str, raw: dict[str, Any]) -> Species:
    context = f"Species '{name}'"
    if not isinstance(raw, dict):
        raise SpeciesConfigError(f"{context}: expected a table")

    life_expectancy = _require_number(
        _require_field(raw, "life_expectancy", context), "life_expectancy", context
    )
    raw_stages = raw.get("life_stages", [])
    if not isinstance(raw_stages, list):
        raise SpeciesConfigError(f"{context}: life_stages must be a list")

    life_stages = tuple(
        sorted((parse_life_stage(s, context) for s in raw_stages), key=lambda ls: ls.min_age)
    )
    return Species(name=name, life_expectancy=life_expectancy, life_stages=life_stages)


# -- TOML loading ------------------------------------------------------------


def load_species(path: Path) -> dict[str, Species]:
    if not path.exists():
        raise SpeciesConfigError(f"Species file not found: {path}")

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SpeciesConfigError(f"Failed to parse {path}: {e}") from e

    raw_species = data.get("species")
    if raw_species is None:
        raise SpeciesConfigError(f"No [species] section in {path}")
    if not isinstance(raw_species, dict):
        raise SpeciesConfigError(f"Species section must be a table in {path}")

    species = {name.lower(): parse_species(name.lower(), raw) for name, raw in raw_species.items()}
    logger.info("Loaded %d species from %s", len(species), path)
    return species


def resolve_species(name: str, extra: dict[str, Species] | None = None) -> Species:
    """Look up a species by name; entries in ``extra`` shadow the built-ins."""
    key = name.strip().lower()
    known = {**BUILTIN_SPECIES, **(extra or {})}
    if key not in known:
        raise SpeciesConfigError(f"Unknown species '{name}' (known: {', '.join(sorted(known))})")
    return known[key]


def list_species(extra: dict[str, Species] | None = None) -> list[Species]:
    known = {**BUILTIN_SPECIES, **(extra or {})}
    return [known[name] for name in sorted(known)]
