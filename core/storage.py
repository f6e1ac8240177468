"""Evidence Manager - Evidence File Store
Local filesystem storage for evidence images, keyed by image id.
"""

import os
from pathlib import Path
from uuid import UUID

from core.config import storage_settings
from core.logging import get_logger


class EvidenceFileStore:
    """Writes evidence images to <root>/<image_id><extension>."""

    def __init__(self, root: str | None = None):
        self.root = Path(root or storage_settings.evidence_root)

    def path_for(self, image_id: UUID, extension: str) -> Path:
        """Resolve the storage path and verify it stays under the root."""
        extension = extension if extension.startswith(".") or not extension else f".{extension}"
        path = (self.root / f"{image_id}{extension}").resolve()

        if not str(path).startswith(str(self.root.resolve())):
            raise ValueError("Path traversal detected")

        return path

    def save(self, image_id: UUID, extension: str, content: bytes) -> Path:
        """Write image bytes. Raises OSError when the write fails."""
        path = self.path_for(image_id, extension)
        os.makedirs(path.parent, exist_ok=True)

        with open(path, "wb") as f:
            f.write(content)

        get_logger().debug("Evidence image stored", image_id=str(image_id), path=str(path))
        return path

    def delete(self, image_id: UUID, extension: str) -> bool:
        """Remove a stored image. Returns False when it was already gone."""
        path = self.path_for(image_id, extension)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    def exists(self, image_id: UUID, extension: str) -> bool:
        return self.path_for(image_id, extension).is_file()


_file_store: EvidenceFileStore | None = None


def get_file_store() -> EvidenceFileStore:
    """Get or create the process-wide file store."""
    global _file_store
    if _file_store is None:
        _file_store = EvidenceFileStore()
    return _file_store
