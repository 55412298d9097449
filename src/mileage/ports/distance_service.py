"""Distance service interface."""

from typing import Protocol

from mileage.core.distance import DistanceLookup


class DistanceService(Protocol):
    """Interface for one-way driving distance lookups."""

    def lookup(self, origin: str, destination: str) -> DistanceLookup:
        """Look up the route; raises ExternalServiceError on transport failure."""
        ...
