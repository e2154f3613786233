import pytest

from birth_quality.config_species import HUMAN
from birth_quality.domain.species import DevelopmentalStage, LifeStage, Species
from birth_quality.domain.subject import Subject


class TestSpecies:
    def test_first_adult_stage_wins(self) -> None:
        species = Species(
            name="dryad",
            life_expectancy=300.0,
            life_stages=(
                LifeStage(DevelopmentalStage.CHILD, 0.0),
                LifeStage(DevelopmentalStage.ADULT, 13.0),
                LifeStage(DevelopmentalStage.ADULT, 18.0),
            ),
        )
        assert species.adult_min_age == 13.0

    def test_no_stages(self) -> None:
        assert Species(name="ooze", life_expectancy=5.0).adult_min_age is None


class TestSubject:
    @pytest.mark.parametrize(("tick_factor", "ageless"), [(0.0, True), (1.0, False), (0.5, False), (None, False)])
    def test_is_ageless(self, tick_factor: float | None, ageless: bool) -> None:
        subject = Subject(name="Ada", species=HUMAN, biological_age=30.0, biological_age_tick_factor=tick_factor)
        assert subject.is_ageless is ageless

    def test_biological_years_floor(self) -> None:
        assert Subject(name="Ada", species=HUMAN, biological_age=29.99).biological_years == 29
