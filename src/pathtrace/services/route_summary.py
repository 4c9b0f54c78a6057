# pathtrace/services/route_summary.py
from dataclasses import dataclass

from pathtrace.domain.entities.trace import SearchTrace


def distance_label(meters: float) -> str:
    if meters > 1000:
        return f"{meters / 1000:.2f} km"
    return f"{round(meters)} m"


def duration_label(seconds: int) -> str:
    if seconds > 60:
        return f"{seconds // 60} min {seconds % 60} s"
    return f"{seconds} s"


@dataclass(frozen=True)
class RouteSummary:
    found: bool
    distance_m: float
    duration_s: int
    hops: int
    expanded: int

    @property
    def distance(self) -> str:
        return distance_label(self.distance_m) if self.found else "no path"

    @property
    def duration(self) -> str:
        return duration_label(self.duration_s) if self.found else "no path"


class RouteSummaryService:
    """Travel figures for a finished search, at a constant cruise speed."""

    def __init__(self, cruise_mps: float = 10.0):
        if cruise_mps <= 0:
            raise ValueError(f"cruise_mps must be > 0, got {cruise_mps}")
        self.cruise_mps = cruise_mps

    def summarize(self, trace: SearchTrace) -> RouteSummary:
        if not trace.found:
            return RouteSummary(False, trace.cost, 0, 0, len(trace))
        return RouteSummary(
            found=True,
            distance_m=trace.cost,
            duration_s=round(trace.cost / self.cruise_mps),
            hops=trace.hops,
            expanded=len(trace),
        )
