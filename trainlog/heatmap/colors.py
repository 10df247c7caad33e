"""Color buckets for heat-map cells.

Hours map onto ascending activity thresholds. The bucket is the greatest
threshold not above the hours value. Positive hours share one color ramp in
both themes; only the "no activity" color of an exact zero differs per theme.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass

from trainlog.heatmap.schemas import Theme

ACTIVITY_THRESHOLDS: tuple[float, ...] = (0.0, 0.5, 1.5, 2.5, 3.5)

ACTIVITY_RAMP: tuple[str, ...] = ("#e4efb1", "#d6e685", "#8cc665", "#44a340", "#1e6823")

NO_ACTIVITY_COLORS: dict[Theme, str] = {
    Theme.LIGHT: "#ebedf0",
    Theme.DARK: "#333333",
}


def _validate_thresholds(thresholds: Sequence[float], ramp: Sequence[str]) -> None:
    if not thresholds or thresholds[0] != 0:
        raise ValueError("thresholds must start at 0")
    if any(later <= earlier for earlier, later in zip(thresholds, thresholds[1:])):
        raise ValueError(f"thresholds must be strictly ascending: {list(thresholds)}")
    if len(ramp) != len(thresholds):
        raise ValueError(f"ramp has {len(ramp)} colors for {len(thresholds)} thresholds")


def _validate_hours(hours: float) -> None:
    if math.isnan(hours) or hours < 0:
        raise ValueError(f"hours must be a non-negative number, got {hours}")


def bucket_index(hours: float, thresholds: Sequence[float] = ACTIVITY_THRESHOLDS) -> int:
    """Return the index of the greatest threshold t with t <= hours.

    >>> bucket_index(0.0), bucket_index(0.1), bucket_index(1.5), bucket_index(9.0)
    (0, 0, 2, 4)
    """
    _validate_hours(hours)
    return bisect_right(thresholds, hours) - 1


def color_for(
    hours: float,
    theme: Theme,
    thresholds: Sequence[float] = ACTIVITY_THRESHOLDS,
    ramp: Sequence[str] = ACTIVITY_RAMP,
) -> str:
    """Return the cell color for an hours value under a theme.

    Args:
        hours: Non-negative training hours
        theme: Light or dark theme
        thresholds: Ascending thresholds starting at 0
        ramp: One color per threshold for positive hours

    Raises:
        ValueError: If hours is negative or NaN, or thresholds/ramp are malformed
    """
    _validate_thresholds(thresholds, ramp)
    index = bucket_index(hours, thresholds)
    if hours == 0:
        return NO_ACTIVITY_COLORS[Theme(theme)]
    return ramp[index]


@dataclass(frozen=True)
class ColorBucketer:
    """Callable color_for bound to a theme.

    theme_version is an opaque token a host renderer can bump to invalidate
    memoized colors; it never influences the result. Instances are hashable so
    they can key a cache.
    """

    theme: Theme = Theme.LIGHT
    thresholds: tuple[float, ...] = ACTIVITY_THRESHOLDS
    ramp: tuple[str, ...] = ACTIVITY_RAMP
    theme_version: int = 0

    def __post_init__(self) -> None:
        _validate_thresholds(self.thresholds, self.ramp)

    def __call__(self, hours: float) -> str:
        return color_for(hours, self.theme, self.thresholds, self.ramp)

    def bucket(self, hours: float) -> int:
        return bucket_index(hours, self.thresholds)


@dataclass(frozen=True)
class LegendEntry:
    hours: float
    color: str
    label: str


def _format_hours(value: float) -> str:
    return f"{value:g}"


def legend(theme: Theme, thresholds: Sequence[float] = ACTIVITY_THRESHOLDS, ramp: Sequence[str] = ACTIVITY_RAMP) -> list[LegendEntry]:
    """Build one legend swatch per threshold, from "no activity" to the top bucket."""
    entries: list[LegendEntry] = []
    for index, threshold in enumerate(thresholds):
        if threshold == 0:
            label = "0 hours"
        elif index == len(thresholds) - 1:
            label = f"{_format_hours(threshold)}+ hours"
        else:
            label = f"{_format_hours(threshold)}-{_format_hours(thresholds[index + 1])} hours"
        entries.append(LegendEntry(hours=threshold, color=color_for(threshold, theme, thresholds, ramp), label=label))
    return entries
