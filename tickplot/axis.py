"""Axis ranges, scales and tick-mark generation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone, tzinfo
from typing import Callable, Optional, Protocol

from .labelling import (
    DLAMCH_P,
    Containment,
    _div,
    _log10,
    _pow10,
    _to_int,
    talbot_lin_hanrahan,
)

__all__ = [
    "Ticker",
    "Normalizer",
    "Tick",
    "LinearScale",
    "LogScale",
    "InvertedScale",
    "DefaultTicks",
    "LogTicks",
    "ConstantTicks",
    "TimeTicks",
    "TickerFunc",
    "Axis",
    "unix_time_in",
    "utc_unix_time",
    "format_float_tick",
]


@dataclass(frozen=True)
class Tick:
    """A single tick mark on an axis; an empty label marks a minor tick."""

    value: float
    label: str = ""

    def is_minor(self) -> bool:
        """Return True if this is a minor tick mark."""
        return self.label == ""

    def length_offset(self, length: float) -> float:
        """Return the offset of the tick line start; minor ticks are half length."""
        if self.is_minor():
            return length / 2
        return 0.0


class Ticker(Protocol):
    def ticks(self, min_: float, max_: float) -> list[Tick]: ...


class Normalizer(Protocol):
    def normalize(self, min_: float, max_: float, x: float) -> float: ...


@dataclass(frozen=True)
class LinearScale:
    """Standard linear axis scale."""

    def normalize(self, min_: float, max_: float, x: float) -> float:
        """Return the fractional distance of x between min_ and max_."""
        return _div(x - min_, max_ - min_)


@dataclass(frozen=True)
class LogScale:
    """Logarithmic axis scale."""

    def normalize(self, min_: float, max_: float, x: float) -> float:
        """Return the fractional logarithmic distance of x between min_ and max_."""
        if min_ <= 0 or max_ <= 0 or x <= 0:
            raise ValueError("Values must be greater than 0 for a log scale.")
        log_min = math.log(min_)
        return _div(math.log(x) - log_min, math.log(max_) - log_min)


@dataclass(frozen=True)
class InvertedScale:
    """Inverts the direction of another scale."""

    normalizer: Normalizer

    def normalize(self, min_: float, max_: float, x: float) -> float:
        """Return the inverted normalized position of x."""
        return self.normalizer.normalize(max_, min_, x)


def format_float_tick(v: float, prec: int) -> str:
    """Format v with prec decimals (at least one), trimming trailing zeros and point."""
    prec = max(prec, 1)
    return f"{v:.{prec}f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class DefaultTicks:
    """A reasonable default set of major and minor tick marks."""

    suggested_tick: int = 0

    def ticks(self, min_: float, max_: float) -> list[Tick]:
        """Return ticks for the range [min_, max_]."""
        if max_ <= min_:
            raise ValueError("illegal range")

        want = self.suggested_tick or 3
        labels, step, q, mag = talbot_lin_hanrahan(
            min_, max_, want, Containment.WITHIN_DATA, None, None, None
        )
        major_delta = step * _pow10(mag)
        if q == 0:
            # The evenly spaced fallback was used, so the label distance is direct.
            major_delta = labels[1] - labels[0]

        off = 1 if (mag < -1 or 6 < mag) else 0
        if math.isfinite(q) and math.trunc(q) != q:
            off += 2
        prec = min(6, max(off, -mag))
        ticks = [Tick(v, format_float_tick(v, prec)) for v in labels]

        if step in (1, 2.5):
            minor_delta = major_delta / 5
        elif step in (2, 3, 4, 5):
            minor_delta = major_delta / step
        else:
            if major_delta / 2 < DLAMCH_P:
                return ticks
            minor_delta = major_delta / 2

        i = 0.0
        while labels[0] + (i - 1) * minor_delta > min_:
            i -= 1
        while True:
            val = labels[0] + i * minor_delta
            if val > max_:
                break
            if not any(abs(t.value - val) < minor_delta / 2 for t in ticks):
                ticks.append(Tick(val))
            i += 1
        return ticks


@dataclass(frozen=True)
class LogTicks:
    """Tick marks suitable for a log-scale axis."""

    def ticks(self, min_: float, max_: float) -> list[Tick]:
        """Return a labelled tick at each power of ten with minor ticks between."""
        if min_ <= 0 or max_ <= 0:
            raise ValueError("Values must be greater than 0 for a log scale.")

        val = _pow10(_to_int(_log10(min_)))
        top = _pow10(_to_int(math.ceil(_log10(max_))))
        ticks: list[Tick] = []
        while val < top:
            ticks.append(Tick(val, format_float_tick(val, -1)))
            ticks.extend(Tick(val * i) for i in range(1, 10))
            val *= 10
        ticks.append(Tick(val, format_float_tick(val, -1)))
        return ticks


class ConstantTicks(tuple):
    """A fixed set of ticks returned regardless of range."""

    def __new__(cls, ticks=()):
        return super().__new__(cls, ticks)

    def ticks(self, min_: float, max_: float) -> list[Tick]:
        """Return the fixed ticks."""
        return list(self)


def unix_time_in(tz: tzinfo) -> Callable[[float], datetime]:
    """Return a function converting Unix seconds to a datetime in tz."""

    def convert(t: float) -> datetime:
        return datetime.fromtimestamp(int(t), tz)

    return convert


def utc_unix_time(t: float) -> datetime:
    """Convert Unix seconds to a UTC datetime."""
    return datetime.fromtimestamp(int(t), timezone.utc)


def _rfc3339(dt: datetime) -> str:
    text = dt.replace(microsecond=0).isoformat()
    offset = dt.utcoffset()
    if offset is not None and not offset:
        text = text[: -len("+00:00")] + "Z"
    return text


@dataclass
class TimeTicks:
    """Ticks for axes representing time values.

    ``format`` is a strftime pattern; when None, RFC 3339 text is used.
    """

    ticker: Optional[Ticker] = None
    format: Optional[str] = None
    time: Optional[Callable[[float], datetime]] = None

    def ticks(self, min_: float, max_: float) -> list[Tick]:
        """Return the underlying ticks with major labels rendered as times."""
        ticker = self.ticker if self.ticker is not None else DefaultTicks()
        to_time = self.time if self.time is not None else utc_unix_time

        def render(value: float) -> str:
            dt = to_time(value)
            return _rfc3339(dt) if not self.format else dt.strftime(self.format)

        return [
            t if t.is_minor() else replace(t, label=render(t.value))
            for t in ticker.ticks(min_, max_)
        ]


@dataclass(frozen=True)
class TickerFunc:
    """Adapts a plain function of (min, max) into a ticker."""

    func: Callable[[float, float], list[Tick]]

    def ticks(self, min_: float, max_: float) -> list[Tick]:
        """Return the ticks produced by the wrapped function."""
        return self.func(min_, max_)


@dataclass
class Axis:
    """A horizontal or vertical plot axis: its range, scale and tick marks."""

    min: float = math.inf
    max: float = -math.inf
    label: str = ""
    padding: float = 5.0
    tick_length: float = 8.0
    marker: Ticker = field(default_factory=DefaultTicks)
    scale: Normalizer = field(default_factory=LinearScale)

    def norm(self, x: float) -> float:
        """Return x as a fraction of the axis range under the axis scale."""
        return self.scale.normalize(self.min, self.max, x)

    def sanitize_range(self) -> None:
        """Make the axis range finite, ordered and non-empty."""
        if math.isinf(self.min) or math.isnan(self.min):
            self.min = 0.0
        if math.isinf(self.max) or math.isnan(self.max):
            self.max = 0.0
        if self.min > self.max:
            self.min, self.max = self.max, self.min
        if self.min == self.max:
            self.min -= 1
            self.max += 1