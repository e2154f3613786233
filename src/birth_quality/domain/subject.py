import math
from dataclasses import dataclass

from birth_quality.domain.species import Species


@dataclass(frozen=True)
class Subject:
    name: str
    species: Species
    biological_age: float
    biological_age_tick_factor: float | None = 1.0  # None = no genes

    @property
    def is_ageless(self) -> bool:
        return self.biological_age_tick_factor == 0.0

    @property
    def biological_years(self) -> int:
        return math.floor(self.biological_age)
