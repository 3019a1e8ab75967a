"""File-save collaborator used for history exports."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class JSONFileExporter:
    """Write export blobs into a directory, creating it on demand."""

    def __init__(self, export_dir: str | Path = "data/exports"):
        self._export_dir = Path(export_dir)

    def save(self, blob: bytes, filename: str) -> Path:
        self._export_dir.mkdir(parents=True, exist_ok=True)
        path = self._export_dir / filename
        path.write_bytes(blob)
        logger.info("Exported %d bytes to %s", len(blob), path)
        return path
