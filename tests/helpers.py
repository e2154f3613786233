from birth_quality.domain.species import DevelopmentalStage, LifeStage, Species
from birth_quality.domain.subject import Subject


def make_species(name: str, adult_age: float | None, life_expectancy: float) -> Species:
    """Build a species with a baby stage at 0 and, optionally, an adult stage."""
    stages = [LifeStage(stage=DevelopmentalStage.BABY, min_age=0.0)]
    if adult_age is not None:
        stages.append(LifeStage(stage=DevelopmentalStage.ADULT, min_age=adult_age))
    return Species(name=name, life_expectancy=life_expectancy, life_stages=tuple(stages))


def make_subject(species: Species, age: float, tick_factor: float | None = 1.0, name: str = "Ssk") -> Subject:
    return Subject(name=name, species=species, biological_age=age, biological_age_tick_factor=tick_factor)
