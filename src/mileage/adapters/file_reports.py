"""File-based report storage adapter."""

from pathlib import Path

from mileage.core.emit import ReportArtifacts


class FileReportStore:
    """
    File-based report storage.

    Implements ReportStore protocol. Each run writes three files named
    after the run's date range and threshold.
    """

    def __init__(self, output_dir: Path | str):
        self.output_dir = Path(output_dir).expanduser()
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def paths_for(self, basename: str) -> tuple[Path, Path, Path]:
        """JSON, meetings CSV and mileage CSV paths for a basename."""
        return (
            self.output_dir / f"{basename}.json",
            self.output_dir / f"{basename}-meetings.csv",
            self.output_dir / f"{basename}-mileage.csv",
        )

    def write(self, basename: str, artifacts: ReportArtifacts) -> list[Path]:
        """Write all artifacts, overwriting any previous run for the same range."""
        json_path, meetings_path, mileage_path = self.paths_for(basename)
        json_path.write_text(artifacts.json, encoding="utf-8")
        meetings_path.write_text(artifacts.meetings_csv, encoding="utf-8")
        mileage_path.write_text(artifacts.mileage_csv, encoding="utf-8")
        return [json_path, meetings_path, mileage_path]
