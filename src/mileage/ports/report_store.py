"""Report store interface."""

from pathlib import Path
from typing import Protocol

from mileage.core.emit import ReportArtifacts


class ReportStore(Protocol):
    """Interface for persisting rendered report artifacts."""

    def write(self, basename: str, artifacts: ReportArtifacts) -> list[Path]:
        """Write all artifacts, returning the paths written."""
        ...
