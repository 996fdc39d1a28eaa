"""Projections of the record collection for the chart and table views."""

import math
from collections.abc import Sequence

from healthy_track.domain.charts import ChartData, ChartPoint, ChartSeries, TableRow
from healthy_track.domain.records import HealthRecord

CHART_METRICS: tuple[tuple[str, str, str], ...] = (
    ("weight", "Weight (kg)", "#1db954"),
    ("sleep", "Sleep (hours)", "#ff0000"),
    ("energy", "Energy Level", "#0000ff"),
    ("mood", "Mood", "#ffff00"),
    ("sport", "Sport (minutes)", "#ee82ee"),
    ("stress", "Stress Level", "#ffa500"),
    ("water", "Water (liters)", "#ffffff"),
)


def project_chart(records: Sequence[HealthRecord]) -> ChartData:
    """Build one series per metric, in collection order."""
    labels = [str(getattr(record, "date", "")) for record in records]
    series = [
        ChartSeries(
            metric=metric,
            label=label,
            color=color,
            points=[
                ChartPoint(date=day, value=_numeric(getattr(record, metric, None)))
                for day, record in zip(labels, records, strict=True)
            ],
        )
        for metric, label, color in CHART_METRICS
    ]
    return ChartData(labels=labels, series=series)


def table_rows(records: Sequence[HealthRecord]) -> list[TableRow]:
    """Format records for the records table."""
    return [
        TableRow(
            id=record.id,
            date=record.date,
            weight=_with_unit(record.weight, "kg"),
            sleep=_with_unit(record.sleep, "hrs"),
            energy=_with_unit(record.energy, ""),
            mood=_with_unit(record.mood, ""),
            sport=_with_unit(record.sport, "min"),
            stress=_with_unit(record.stress, ""),
            food_type=record.food_type,
            water=_with_unit(record.water, "L"),
        )
        for record in records
    ]


def _numeric(value: object) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _with_unit(value: float | None, unit: str) -> str:
    number = _numeric(value)
    if number is None:
        return ""
    return f"{number:g} {unit}".strip()
