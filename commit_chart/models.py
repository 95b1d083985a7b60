from datetime import date
from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator


class CommitRecord(BaseModel):
    """Single commit as returned by the GitLab commit listing."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    committed_date: datetime


class ProjectMeta(BaseModel):
    """Project metadata needed to title and bound the chart."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    created_at: datetime
    path_with_namespace: str = Field(min_length=1)


class TimeSeries(BaseModel):
    """Ordered days paired with the cumulative commit count on each day."""

    days: list[date] = Field(default_factory=list)
    cumulative_counts: list[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_shape(self) -> "TimeSeries":
        if len(self.days) != len(self.cumulative_counts):
            raise ValueError("days and cumulative_counts must have equal length")
        for previous, current in zip(self.days, self.days[1:]):
            if current <= previous:
                raise ValueError("days must be strictly increasing")
        previous_count = 0
        for count in self.cumulative_counts:
            if count < previous_count:
                raise ValueError("cumulative_counts must be non-decreasing")
            previous_count = count
        return self

    def points(self) -> list[tuple[date, int]]:
        return list(zip(self.days, self.cumulative_counts))

    @property
    def total(self) -> int:
        return self.cumulative_counts[-1] if self.cumulative_counts else 0
