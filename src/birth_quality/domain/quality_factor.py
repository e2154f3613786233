from dataclasses import dataclass


@dataclass(frozen=True)
class QualityFactor:
    label: str
    quality: float
    positive: bool
    count: str
    quality_change: str
