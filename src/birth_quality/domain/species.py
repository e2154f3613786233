from dataclasses import dataclass
from enum import StrEnum


class DevelopmentalStage(StrEnum):
    BABY = "baby"
    CHILD = "child"
    ADULT = "adult"


@dataclass(frozen=True)
class LifeStage:
    stage: DevelopmentalStage
    min_age: float


@dataclass(frozen=True)
class Species:
    name: str
    life_expectancy: float
    life_stages: tuple[LifeStage, ...] = ()

    @property
    def adult_min_age(self) -> float | None:
        """Min age of the first adult life stage, or None if the species never matures."""
        for life_stage in self.life_stages:
            if life_stage.stage is DevelopmentalStage.ADULT:
                return life_stage.min_age
        return None
