from pathlib import Path

import pytest

from birth_quality.config_species import (
    BUILTIN_SPECIES,
    HUMAN,
    SpeciesConfigError,
    list_species,
    load_species,
    parse_species,
    resolve_species,
)
from birth_quality.domain.species import DevelopmentalStage, LifeStage, Species

_GOBLIN_TOML = """
[species.Goblin]
life_expectancy = 50
life_stages = [
  { stage = "adult", min_age = 10 },
  { stage = "baby", min_age = 0 },
  { stage = "child", min_age = 2.5 },
]

[species.human]
life_expectancy = 70
life_stages = [{ stage = "adult", min_age = 16 }]
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "species.toml"
    path.write_text(text)
    return path


# -- Built-ins ---------------------------------------------------------------


class TestBuiltinSpecies:
    def test_human_baseline(self) -> None:
        assert HUMAN.adult_min_age == 18.0
        assert HUMAN.life_expectancy == 80.0

    def test_every_builtin_matures(self) -> None:
        for species in BUILTIN_SPECIES.values():
            assert species.adult_min_age is not None
            assert species.life_expectancy > 0

    def test_adult_min_age_none_without_adult_stage(self) -> None:
        larva = Species(name="larva", life_expectancy=3.0, life_stages=(LifeStage(DevelopmentalStage.BABY, 0.0),))
        assert larva.adult_min_age is None


# -- Parsing -----------------------------------------------------------------


class TestParseSpecies:
    def test_stages_sorted_by_age(self) -> None:
        species = parse_species(
            "goblin",
            {
                "life_expectancy": 50,
                "life_stages": [{"stage": "adult", "min_age": 10}, {"stage": "baby", "min_age": 0}],
            },
        )
        assert [ls.stage for ls in species.life_stages] == [DevelopmentalStage.BABY, DevelopmentalStage.ADULT]
        assert species.adult_min_age == 10.0

    def test_missing_life_expectancy(self) -> None:
        with pytest.raises(SpeciesConfigError, match="missing required field 'life_expectancy'"):
            parse_species("goblin", {"life_stages": []})

    def test_non_numeric_life_expectancy(self) -> None:
        with pytest.raises(SpeciesConfigError, match="must be a number"):
            parse_species("goblin", {"life_expectancy": "long"})

    def test_boolean_is_not_a_number(self) -> None:
        with pytest.raises(SpeciesConfigError, match="must be a number"):
            parse_species("goblin", {"life_expectancy": True})

    def test_invalid_stage(self) -> None:
        with pytest.raises(SpeciesConfigError, match="invalid stage 'elder'"):
            parse_species("goblin", {"life_expectancy": 50, "life_stages": [{"stage": "elder", "min_age": 40}]})

    def test_stage_missing_min_age(self) -> None:
        with pytest.raises(SpeciesConfigError, match="missing required field 'min_age'"):
            parse_species("goblin", {"life_expectancy": 50, "life_stages": [{"stage": "adult"}]})

    def test_stage_not_a_table(self) -> None:
        with pytest.raises(SpeciesConfigError, match="must be a table"):
            parse_species("goblin", {"life_expectancy": 50, "life_stages": [10]})

    def test_stages_not_a_list(self) -> None:
        with pytest.raises(SpeciesConfigError, match="life_stages must be a list"):
            parse_species("goblin", {"life_expectancy": 50, "life_stages": "adult"})

    def test_species_not_a_table(self) -> None:
        with pytest.raises(SpeciesConfigError, match="expected a table"):
            parse_species("goblin", 50)  # type: ignore[arg-type]


# -- TOML loading ------------------------------------------------------------


class TestLoadSpecies:
    def test_loads_and_lowercases(self, tmp_path: Path) -> None:
        species = load_species(_write(tmp_path, _GOBLIN_TOML))
        assert set(species) == {"goblin", "human"}
        goblin = species["goblin"]
        assert goblin.name == "goblin"
        assert goblin.life_expectancy == 50.0
        assert goblin.adult_min_age == 10.0

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SpeciesConfigError, match="Species file not found"):
            load_species(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        with pytest.raises(SpeciesConfigError, match="Failed to parse"):
            load_species(_write(tmp_path, "[species\nbroken = "))

    def test_no_species_section(self, tmp_path: Path) -> None:
        with pytest.raises(SpeciesConfigError, match=r"No \[species\] section"):
            load_species(_write(tmp_path, "[other]\nx = 1\n"))

    def test_species_section_not_a_table(self, tmp_path: Path) -> None:
        with pytest.raises(SpeciesConfigError, match="Species section must be a table"):
            load_species(_write(tmp_path, "species = [1, 2]\n"))


class TestResolveSpecies:
    def test_case_insensitive(self) -> None:
        assert resolve_species("  Kobold ") is BUILTIN_SPECIES["kobold"]

    def test_unknown_lists_known(self) -> None:
        with pytest.raises(SpeciesConfigError, match="Unknown species 'dragon'.*elf"):
            resolve_species("dragon")

    def test_extra_shadows_builtin(self, tmp_path: Path) -> None:
        extra = load_species(_write(tmp_path, _GOBLIN_TOML))
        assert resolve_species("human", extra).adult_min_age == 16.0
        assert resolve_species("goblin", extra).life_expectancy == 50.0

    def test_list_species_sorted(self, tmp_path: Path) -> None:
        extra = load_species(_write(tmp_path, _GOBLIN_TOML))
        names = [s.name for s in list_species(extra)]
        assert names == sorted(names)
        assert "goblin" in names
        assert "kobold" in names
