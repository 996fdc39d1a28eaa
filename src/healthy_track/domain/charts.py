"""Domain models for chart and table projections."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChartPoint:
    """A single dated value; ``value`` is None for a gap."""

    date: str
    value: float | None


@dataclass(frozen=True)
class ChartSeries:
    """Time series of one tracked metric."""

    metric: str
    label: str
    color: str
    points: list[ChartPoint]


@dataclass(frozen=True)
class ChartData:
    """Multi-series dataset aligned on record dates."""

    labels: list[str]
    series: list[ChartSeries]

    def get(self, metric: str) -> ChartSeries | None:
        """Return the series for a metric, if projected."""
        for series in self.series:
            if series.metric == metric:
                return series
        return None


@dataclass(frozen=True)
class TableRow:
    """Display strings for one record in the records table."""

    id: str
    date: str
    weight: str
    sleep: str
    energy: str
    mood: str
    sport: str
    stress: str
    food_type: str
    water: str
