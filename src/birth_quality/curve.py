"""Piecewise-linear lookup curve for the birth ritual quality offset.

The vanilla birth quality curve peaks between human ages 20 and 30:

    (14, 0.0), (15, 0.3), (20, 0.5), (30, 0.5), (40, 0.3), (65, 0.0)

Inputs outside the control points clamp to the first/last value.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from birth_quality.exceptions import BirthQualityException


class CurveError(BirthQualityException):
    """Raised when a curve cannot be built from the given points."""


@dataclass(frozen=True)
class CurvePoint:
    x: float
    y: float


class SimpleCurve:
    def __init__(self, points: Iterable[tuple[float, float]]) -> None:
        self._points = tuple(sorted((CurvePoint(float(x), float(y)) for x, y in points), key=lambda p: p.x))
        if not self._points:
            raise CurveError("Curve requires at least one point")

    @property
    def points(self) -> tuple[CurvePoint, ...]:
        return self._points

    def evaluate(self, x: float) -> float:
        first, last = self._points[0], self._points[-1]
        if x <= first.x:
            return first.y
        if x >= last.x:
            return last.y
        for lo, hi in zip(self._points, self._points[1:]):
            if x <= hi.x:
                span = hi.x - lo.x
                if span <= 0.0:
                    return hi.y
                return lo.y + (x - lo.x) / span * (hi.y - lo.y)
        return last.y


BIRTH_QUALITY_CURVE = SimpleCurve(
    [
        (14.0, 0.0),
        (15.0, 0.3),
        (20.0, 0.5),
        (30.0, 0.5),
        (40.0, 0.3),
        (65.0, 0.0),
    ]
)
