"""Drawdown analysis over a cumulative series.

The running peak starts at zero, the account's starting point, so a
losing first day is already a drawdown. Each decline below the peak is
tracked as its own episode with an explicit start and trough.
"""

from typing import Optional, Sequence

from tradestats.models import DrawdownEpisode, SeriesPoint


def drawdown_episodes(series: Sequence[SeriesPoint]) -> list[DrawdownEpisode]:
    """Split a cumulative series into peak-to-trough episodes.

    An episode opens on the first point below the running peak and
    closes on the first point that gets back to that peak. The peak
    date only moves on a strictly higher value, so an episode that
    follows a return to an equal peak still starts at the original
    peak date. When the peak is still the zero baseline, the episode
    starts on the first date of the series.

    Args:
        series: Cumulative series in ascending date order.

    Returns:
        Episodes in chronological order. The last one has no
        recovery date if the series ends below its peak.
    """
    if not series:
        return []

    episodes: list[DrawdownEpisode] = []
    peak = 0.0
    peak_date = series[0].date
    current: Optional[dict] = None

    for point in series:
        if current is not None and point.value >= current["peak"]:
            episodes.append(DrawdownEpisode(recovery_date=point.date, **current))
            current = None

        if point.value > peak:
            peak = point.value
            peak_date = point.date
        elif point.value < peak:
            if current is None:
                current = {
                    "peak": peak,
                    "peak_date": peak_date,
                    "trough": point.value,
                    "trough_date": point.date,
                }
            elif point.value < current["trough"]:
                current["trough"] = point.value
                current["trough_date"] = point.date

    if current is not None:
        episodes.append(DrawdownEpisode(**current))

    return episodes


def deepest_episode(episodes: Sequence[DrawdownEpisode]) -> Optional[DrawdownEpisode]:
    """The episode with the largest depth; the earliest wins ties."""
    deepest = None
    for episode in episodes:
        if deepest is None or episode.depth > deepest.depth:
            deepest = episode
    return deepest


def max_drawdown(series: Sequence[SeriesPoint]) -> tuple[float, int]:
    """Largest peak-to-trough decline and its duration.

    Returns:
        Tuple of (depth, days from the episode's peak to its trough).
        (0.0, 0) when the series never drops below its peak.
    """
    deepest = deepest_episode(drawdown_episodes(series))
    if deepest is None:
        return 0.0, 0
    return deepest.depth, deepest.duration_days
