from dataclasses import dataclass


@dataclass(frozen=True)
class AgeProfile:
    biological_age: float
    race_maturation_age: float
    race_lifespan: float


@dataclass(frozen=True)
class ReferenceProfile:
    maturation_age: float
    lifespan: float
