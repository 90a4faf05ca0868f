"""JSON export of scan results."""

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from nodeprune.models import ExportRecord, ScanResult
from nodeprune.scanner import NodePruneError

log = logging.getLogger(__name__)

_records = TypeAdapter(list[ExportRecord])


class ExportError(NodePruneError):
    """Results could not be written to or read from an export file."""


def export_results(results: list[ScanResult], export_path: Path) -> Path:
    """
    Write results to a JSON file, one object per result, in list order.

    Args:
        results: Results to export
        export_path: Destination file (overwritten)

    Returns:
        The path written

    Raises:
        ExportError: if the file cannot be written
    """
    records = [ExportRecord.from_result(r) for r in results]
    payload = _records.dump_json(records, indent=2)

    path = Path(export_path)
    try:
        path.write_bytes(payload + b"\n")
    except OSError as e:
        raise ExportError(f"failed to create export file: {e}") from e

    log.info("Exported %d results to %s", len(records), path)
    return path


def load_export(export_path: Path) -> list[ExportRecord]:
    """Read an export file back into records."""
    try:
        return _records.validate_json(Path(export_path).read_bytes())
    except (OSError, ValidationError) as e:
        raise ExportError(f"failed to read export file: {e}") from e
