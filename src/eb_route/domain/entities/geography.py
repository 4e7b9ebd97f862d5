from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RoadClass(str, Enum):
    MOTORWAY = "motorway"
    MOTORWAY_LINK = "motorway_link"
    TRUNK = "trunk"
    TRUNK_LINK = "trunk_link"
    PRIMARY = "primary"
    PRIMARY_LINK = "primary_link"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"
    RESIDENTIAL = "residential"
    LIVING_STREET = "living_street"
    UNCLASSIFIED = "unclassified"

    @classmethod
    def parse(cls, tag: str | RoadClass) -> RoadClass:
        """Case-sensitive; 'motorway-link' and 'motorway_link' are the same class.
        Unknown tags fall back to UNCLASSIFIED."""
        if isinstance(tag, RoadClass):
            return tag
        try:
            return cls(tag.replace("-", "_"))
        except ValueError:
            return cls.UNCLASSIFIED


# Core network types; node coordinates are WGS84 degrees
@dataclass(frozen=True)
class Node:
    id: int
    lat: float
    lon: float


@dataclass(slots=True)
class Edge:
    to: int
    distance_m: float
    speed_limit_kmh: float  # fixed at creation from the road class
    road_class: RoadClass
    crowd_multiplier: float = 1.0  # only the pattern simulator writes this
