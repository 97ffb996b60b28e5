"""Pydantic models for statistics responses."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class Period(str, Enum):
    """Aggregation window of the charts."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class Bucket(BaseModel):
    """One point of a chart series: a day or month label and its value."""

    label: str
    value: int | float


class PeriodCharts(BaseModel):
    """Journey-count and distance series, aligned by index."""

    journeyCount: list[Bucket]
    distanceCount: list[Bucket]
