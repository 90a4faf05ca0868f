"""Data models for nodeprune."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ScanResult(BaseModel):
    """Measurements for a single matched directory."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Absolute path of the matched directory")
    size_bytes: int = Field(0, ge=0, description="Total size of regular files in bytes")
    file_count: int = Field(0, ge=0, description="Number of files")
    dir_count: int = Field(0, ge=0, description="Number of directories, including the match itself")
    read_order: int = Field(0, ge=0, description="1-based position the path was submitted to the pool")
    modified_at: Optional[datetime] = Field(
        None, description="Modification time of the matched directory itself"
    )

    @property
    def size_human(self) -> str:
        """Human-readable size string (binary units)."""
        from nodeprune.display import format_size

        return format_size(self.size_bytes)

    def age_days(self, now: Optional[datetime] = None) -> Optional[int]:
        """Whole days elapsed since modification, or None if unknown."""
        if self.modified_at is None:
            return None
        now = now or datetime.now(self.modified_at.tzinfo)
        return int((now - self.modified_at).total_seconds() // 86400)


class ScanConfig(BaseModel):
    """Options controlling a single run."""

    root: Path = Field(Path("."), description="Directory to scan")
    dry_run: bool = Field(False, description="Simulate deletion")
    auto_yes: bool = Field(False, description="Skip the confirmation prompt")
    scan_only: bool = Field(False, description="Only scan and report, never delete")
    min_size: int = Field(0, ge=0, description="Minimum size in bytes (0 = unset)")
    max_size: int = Field(0, ge=0, description="Maximum size in bytes (0 = unset)")
    older_than: int = Field(0, ge=0, description="Minimum age in days (0 = unset)")
    interactive: bool = Field(False, description="Choose directories interactively")
    export_path: Optional[Path] = Field(None, description="Write results to this JSON file")

    @property
    def has_filters(self) -> bool:
        """Whether any size or age filter is set."""
        return self.min_size > 0 or self.max_size > 0 or self.older_than > 0


class CleanupResult(BaseModel):
    """Outcome of deleting a single directory."""

    path: str = Field(..., description="Path that was deleted")
    success: bool = Field(True, description="Whether deletion succeeded")
    error: Optional[str] = Field(None, description="Error message if failed")
    dry_run: bool = Field(False, description="Whether this was a dry run")


class DeletionSummary(BaseModel):
    """Tally of a deletion batch."""

    deleted: int = Field(0, ge=0, description="Directories deleted (or that would be)")
    failed: int = Field(0, ge=0, description="Directories that could not be deleted")
    dry_run: bool = Field(False, description="Whether this was a dry run")

    @property
    def total(self) -> int:
        """Number of directories processed."""
        return self.deleted + self.failed


class ExportRecord(BaseModel):
    """One entry of the JSON export file."""

    path: str
    size: int
    files: int
    dirs: int
    read_order: int
    modified_time: Optional[str] = None

    @classmethod
    def from_result(cls, result: ScanResult) -> "ExportRecord":
        modified = result.modified_at.isoformat(timespec="seconds") if result.modified_at else None
        return cls(
            path=result.path,
            size=result.size_bytes,
            files=result.file_count,
            dirs=result.dir_count,
            read_order=result.read_order,
            modified_time=modified,
        )
