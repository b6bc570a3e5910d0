"""Axis label selection using the Talbot, Lin and Hanrahan algorithm.

The search looks for a set of "nice" label values for a data range that
balances simplicity, coverage, density and legibility.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional, Sequence

__all__ = [
    "DLAMCH_E",
    "DLAMCH_B",
    "DLAMCH_P",
    "DEFAULT_NICE_NUMBERS",
    "Containment",
    "Weights",
    "talbot_lin_hanrahan",
    "min_abs_mag",
    "simplicity",
    "max_simplicity",
    "coverage",
    "max_coverage",
    "density",
    "max_density",
    "unit_legibility",
]

# Machine epsilon for IEEE doubles, 2**-53.
DLAMCH_E = 1.0 / (1 << 53)
# Radix of the machine.
DLAMCH_B = 2
# Base times epsilon.
DLAMCH_P = DLAMCH_B * DLAMCH_E

_EPS = DLAMCH_P * 100

# Exponent bound for the magnitude search.
_MAX_EXP = 309

DEFAULT_NICE_NUMBERS = (1.0, 5.0, 2.0, 2.5, 4.0, 3.0)

# Best attainable score of each legibility criterion: label format,
# font size, orientation and overlap.
_BEST_LEGIBILITY_CRITERIA = (1.0, 1.0, 1.0, 1.0)

_LOG2E = 1.4426950408889634073599246810018921374266459541529859
_LN2_OVER_LN10 = 0.30102999566398119521373889472449302676818988146210854

_POW10 = tuple(float(f"1e{i}") for i in range(32))
_POW10_POS32 = tuple(float(f"1e{32 * i}") for i in range(10))
_POW10_NEG32 = tuple(float(f"1e-{32 * i}") for i in range(11))

_INT64_MIN = -(2**63)


class Containment(IntEnum):
    """Guarantees on how the labels and the data range relate."""

    FREE = 0
    """No restriction on label containment."""
    CONTAIN_DATA = 1
    """The whole data range lies within [label_min, label_max]."""
    WITHIN_DATA = 2
    """All labels lie within [d_min, d_max]."""


@dataclass(frozen=True)
class Weights:
    """Weights used to combine the partial scores of a labelling."""

    simplicity: float = 0.25
    coverage: float = 0.2
    density: float = 0.5
    legibility: float = 0.05

    def score(self, s: float, c: float, d: float, l: float) -> float:
        """Return the weighted total of simplicity, coverage, density and legibility."""
        return (
            self.simplicity * s
            + self.coverage * c
            + self.density * d
            + self.legibility * l
        )


Legibility = Callable[[float, float, float], float]


def _div(a: float, b: float) -> float:
    """IEEE-754 division that yields inf or nan instead of raising."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _floor(x: float) -> float:
    return x if not math.isfinite(x) else float(math.floor(x))


def _ceil(x: float) -> float:
    return x if not math.isfinite(x) else float(math.ceil(x))


def _fmin(a: float, b: float) -> float:
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return a if a < b else b


def _fmax(a: float, b: float) -> float:
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return a if a > b else b


def _to_int(x: float) -> int:
    """Truncate to an integer; non-finite and out-of-range values map to the int64 minimum."""
    if not math.isfinite(x) or abs(x) >= 2.0**63:
        return _INT64_MIN
    return int(x)


def _pow10(n: int) -> float:
    """Return 10**n computed from exact power tables."""
    if 0 <= n <= 308:
        return _POW10_POS32[n // 32] * _POW10[n % 32]
    if -323 <= n <= 0:
        return _POW10_NEG32[(-n) // 32] / _POW10[(-n) % 32]
    if n > 0:
        return math.inf
    return 0.0


def _log2(x: float) -> float:
    if math.isnan(x) or x < 0:
        return math.nan
    if x == 0:
        return -math.inf
    if math.isinf(x):
        return math.inf
    frac, exp = math.frexp(x)
    if frac == 0.5:
        return float(exp - 1)
    return math.log(frac) * _LOG2E + exp


def _log10(x: float) -> float:
    return _log2(x) * _LN2_OVER_LN10


def _fmod(x: float, y: float) -> float:
    if y == 0 or math.isinf(x) or math.isnan(x) or math.isnan(y):
        return math.nan
    return math.fmod(x, y)


def _linear(d_min: float, d_max: float, want: int) -> tuple[list[float], float, float, int]:
    step = _div(d_max - d_min, float(want - 1))
    values = [d_min + i * step for i in range(want)]
    return values, step, 0.0, min_abs_mag(d_min, d_max)


@dataclass
class _Selection:
    n: int = 0
    l_min: float = 0.0
    l_max: float = 0.0
    l_step: float = 0.0
    lq: float = 0.0
    score: float = -2.0
    magnitude: int = 0


def talbot_lin_hanrahan(
    d_min: float,
    d_max: float,
    want: int,
    containment: Containment = Containment.FREE,
    q: Optional[Sequence[float]] = None,
    w: Optional[Weights] = None,
    legibility: Optional[Legibility] = None,
) -> tuple[list[float], float, float, int]:
    """Choose about ``want`` label values for the range [d_min, d_max].

    Returns ``(values, step, q, magnitude)`` where ``step`` is the chosen
    step before scaling by ``10**magnitude`` and ``q`` is the nice number
    used. When a simple evenly spaced fallback is used, ``q`` is 0 and
    ``step`` is the actual distance between values.
    """
    if d_min > d_max:
        raise ValueError("labelling: invalid data range: min greater than max")

    nice = tuple(DEFAULT_NICE_NUMBERS if q is None else q)
    weights = Weights() if w is None else w
    legible = unit_legibility if legibility is None else legibility

    if d_max - d_min < _EPS:
        return _linear(d_min, d_max, want)

    best = _Selection()

    skip = 0
    searching = True
    while searching:
        skip += 1
        for nq in nice:
            sm = max_simplicity(nq, nice, skip)
            if weights.score(sm, 1, 1, 1) < best.score:
                searching = False
                break

            have = 1
            while True:
                have += 1
                dm = max_density(have, want)
                if weights.score(sm, 1, dm, 1) < best.score:
                    break

                delta = (d_max - d_min) / float(have + 1) / float(skip) / nq

                mag = _to_int(_ceil(_log10(delta)))
                while mag < _MAX_EXP:
                    step = float(skip) * nq * _pow10(mag)

                    cm = max_coverage(d_min, d_max, step * float(have - 1))
                    if weights.score(sm, cm, dm, 1) < best.score:
                        break

                    frac_step = _div(step, float(skip))
                    k_step = step * float(have - 1)

                    min_start = (_floor(_div(d_max, step)) - float(have - 1)) * float(skip)
                    max_start = _ceil(_div(d_max, step)) * float(skip)
                    start = min_start
                    while start <= max_start and start != start - 1:
                        l_min = start * frac_step
                        l_max = l_min + k_step
                        start += 1

                        if containment == Containment.CONTAIN_DATA:
                            if d_min < l_min or l_max < d_max:
                                continue
                        elif containment == Containment.WITHIN_DATA:
                            if l_min < d_min or d_max < l_max:
                                continue

                        score = weights.score(
                            simplicity(nq, nice, skip, l_min, l_max, step),
                            coverage(d_min, d_max, l_min, l_max),
                            density(have, want, d_min, d_max, l_min, l_max),
                            legible(l_min, l_max, step),
                        )
                        if score > best.score:
                            best = _Selection(
                                n=have,
                                l_min=l_min,
                                l_max=l_max,
                                l_step=float(skip) * nq,
                                lq=nq,
                                score=score,
                                magnitude=mag,
                            )
                    mag += 1

    if best.score == -2:
        return _linear(d_min, d_max, want)

    step = best.l_step * _pow10(best.magnitude)
    values = [best.l_min + i * step for i in range(best.n)]
    return values, best.l_step, best.lq, best.magnitude


def min_abs_mag(a: float, b: float) -> int:
    """Return the smaller decimal magnitude of |a| and |b|."""
    return _to_int(_fmin(_floor(_log10(abs(a))), _floor(_log10(abs(b)))))


def simplicity(
    q: float, nice: Sequence[float], skip: int, l_min: float, l_max: float, l_step: float
) -> float:
    """Return the simplicity score of a labelling using nice number ``q``."""
    for i, v in enumerate(nice):
        if v == q:
            m = _fmod(l_min, l_step)
            bonus = 0.0
            if (m < _EPS or l_step - m < _EPS) and l_min <= 0 <= l_max:
                bonus = 1.0
            return 1 - _div(float(i), float(len(nice)) - 1) - float(skip) + bonus
    raise ValueError("labelling: invalid q for Q")


def max_simplicity(q: float, nice: Sequence[float], skip: int) -> float:
    """Return the best simplicity score reachable for ``q`` and ``skip``."""
    for i, v in enumerate(nice):
        if v == q:
            return 1 - _div(float(i), float(len(nice)) - 1) - float(skip) + 1
    raise ValueError("labelling: invalid q for Q")


def coverage(d_min: float, d_max: float, l_min: float, l_max: float) -> float:
    """Score how closely the extreme labels match the extreme data values."""
    r = 0.1 * (d_max - d_min)
    hi = d_max - l_max
    lo = d_min - l_min
    return 1 - _div(0.5 * (hi * hi + lo * lo), r * r)


def max_coverage(d_min: float, d_max: float, span: float) -> float:
    """Return the best coverage score reachable for a label span."""
    r = d_max - d_min
    if span <= r:
        return 1.0
    h = 0.5 * (span - r)
    r *= 0.1
    return 1 - _div(h * h, r * r)


def density(
    have: int, want: int, d_min: float, d_max: float, l_min: float, l_max: float
) -> float:
    """Score how close the label density is to the wanted density."""
    rho = _div(float(have - 1), l_max - l_min)
    rhot = _div(float(want - 1), _fmax(l_max, d_max) - _fmin(d_min, l_min))
    d = _div(rho, rhot)
    if d >= 1:
        return 2 - d
    return 2 - _div(rhot, rho)


def max_density(have: int, want: int) -> float:
    """Return the best density score reachable for ``have`` labels."""
    if have < want:
        return 1.0
    return 2 - _div(float(have - 1), float(want - 1))


def unit_legibility(l_min: float, l_max: float, l_step: float) -> float:
    """Default legibility score, ignoring label spacing.

    Legibility is the mean of its criteria (format, font size, orientation
    and overlap); here every criterion is taken at its best, so the score
    is the same for any labelling.
    """
    criteria = _BEST_LEGIBILITY_CRITERIA
    return sum(criteria) / len(criteria)