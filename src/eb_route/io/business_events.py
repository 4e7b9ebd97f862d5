# eb_route/io/business_events.py

from dataclasses import dataclass


# Base type for analytics records
@dataclass
class BizEvent:
    run_id: str
    seq: int  # emission order within the run
    name: str  # stable event name


@dataclass
class PatternsAppliedBiz(BizEvent):
    edges_scanned: int
    congestion_points: int
    shortcuts_found: int


@dataclass
class RouteComputedBiz(BizEvent):
    origin: int
    destination: int
    mode: str
    hour: int
    found: bool
    nodes: int
    distance_m: float
    time_s: float
