"""
Media storage for listing pictures and fact sheets.

Uploaded images are re-encoded to WebP with Pillow and PDFs are copied
as-is. Files live under the uploads directory and are named after the
owning record's natural key:

```
uploads/
├── images/
│   ├── properties/<key>/<uuid>.webp   # galleries
│   ├── agents/<key>.webp              # single pictures
│   └── bluePrints/<key>.webp
└── factSheets/<key>.pdf
```

Changes made while handling a request are collected in a
``MediaChangeSet``. New files are written to a staging area first and
only moved into place once the database flush succeeded; if the
transaction fails afterwards the moves are undone. Superseded files are
removed after the response has been sent.
"""

import io
import logging
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from fastapi import BackgroundTasks, UploadFile
from PIL import Image, UnidentifiedImageError

from realty_api.core.exceptions import InvalidMediaException, MediaException
from realty_api.utils.text import safe_segment

logger = logging.getLogger(__name__)

GALLERY = "gallery"
PICTURE = "picture"
PDF = "pdf"

STAGING_DIR = ".staging"


@dataclass(frozen=True)
class MediaSlot:
    """Where one kind of upload for a resource is stored.

    Attributes:
        field: Form field carrying the upload(s).
        attr: Model attribute receiving the URL(s); ``images`` for galleries.
        kind: One of ``gallery``, ``picture`` or ``pdf``.
        directory: Directory relative to the uploads root.
        required_on_create: Reject creation without this upload.
    """

    field: str
    attr: str
    kind: str
    directory: str
    required_on_create: bool = False

    def target(self, key: str) -> str:
        """Relative path of the directory or file owned by ``key``."""
        segment = safe_segment(key)
        if self.kind == GALLERY:
            return f"{self.directory}/{segment}"
        extension = "pdf" if self.kind == PDF else "webp"
        return f"{self.directory}/{segment}.{extension}"


class MediaStorage:
    """Filesystem primitives rooted at the uploads directory.

    Args:
        root: Uploads directory.
        public_base: Base URL the service is reachable at.
        quality: WebP quality (1-100).
        max_bytes: Largest accepted upload.
    """

    def __init__(
        self,
        root: Union[str, Path],
        public_base: str,
        quality: int = 80,
        max_bytes: int = 20 * 1024 * 1024,
    ) -> None:
        self.root = Path(root).resolve()
        self.public_base = public_base.rstrip("/")
        self.quality = quality
        self.max_bytes = max_bytes
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, relative: str) -> Path:
        """Resolve a relative media path, refusing anything outside the root."""
        path = (self.root / relative).resolve()
        if path != self.root and self.root not in path.parents:
            raise MediaException(f"Path escapes uploads directory: {relative}")
        return path

    def url_for(self, relative: str) -> str:
        return f"{self.public_base}/uploads/{relative}"

    def new_staging_dir(self) -> Path:
        path = self.root / STAGING_DIR / uuid.uuid4().hex
        path.mkdir(parents=True, exist_ok=True)
        return path

    async def read_upload(self, upload: UploadFile) -> bytes:
        """Read an upload, rejecting empty or oversized files.

        The declared size is checked before reading, and at most one
        byte past the limit is ever loaded.

        Raises:
            InvalidMediaException: If the file is empty or too large.
        """
        if upload.size is not None and upload.size > self.max_bytes:
            raise self._too_large(upload)
        data = await upload.read(self.max_bytes + 1)
        if not data:
            raise InvalidMediaException(f"Uploaded file {upload.filename} is empty.")
        if len(data) > self.max_bytes:
            raise self._too_large(upload)
        return data

    def _too_large(self, upload: UploadFile) -> InvalidMediaException:
        return InvalidMediaException(
            f"Uploaded file {upload.filename} is too large.",
            details={"max_bytes": self.max_bytes},
        )

    def convert_to_webp(self, data: bytes, destination: Path) -> int:
        """Decode an image and save it as WebP.

        Args:
            data: Raw upload bytes.
            destination: Target file path; parents are created.

        Returns:
            Size of the written file in bytes.

        Raises:
            InvalidMediaException: If the bytes are not a readable image.
            MediaException: If the file cannot be written.
        """
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise InvalidMediaException(details={"reason": str(e)})

        # WebP only stores RGB(A)
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGBA" if "A" in image.getbands() else "RGB")

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            image.save(destination, format="WEBP", quality=self.quality, method=4)
        except OSError as e:
            raise MediaException(f"Failed to save image: {e}")
        finally:
            image.close()

        file_size = destination.stat().st_size
        logger.debug(f"Converted image: {destination} ({file_size} bytes)")
        return file_size

    def save_pdf(self, data: bytes, destination: Path) -> int:
        """Write an uploaded PDF after checking its signature."""
        if not data.startswith(b"%PDF"):
            raise InvalidMediaException("Only PDF files are allowed.")
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(data)
        except OSError as e:
            raise MediaException(f"Failed to save PDF: {e}")
        return len(data)

    def rename_path(self, source: Path, destination: Path) -> bool:
        """Move a file or directory, doing nothing when the source is missing.

        Returns:
            True if something was moved.
        """
        if not source.exists():
            logger.debug(f"Nothing to rename at {source}")
            return False
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(source), str(destination))
        logger.info(f"Renamed {source} -> {destination}")
        return True

    def delete_path(self, path: Path) -> bool:
        """Delete a file or directory tree, doing nothing when it is missing.

        Returns:
            True if something was deleted.
        """
        if not path.exists():
            return False
        if path.is_dir():
            shutil.rmtree(path)
        else:
            path.unlink()
        logger.info(f"Deleted {path}")
        return True

    def discard(self, path: Path) -> None:
        """Best-effort delete used after the response has been sent."""
        try:
            self.delete_path(path)
        except OSError as e:
            logger.warning(f"Could not delete media at {path}: {e}")


class MediaChangeSet:
    """Staged media changes for one request.

    Usage:
        ```python
        changes = MediaChangeSet(storage)
        urls = await changes.stage_uploads(slot, key, uploads)
        ...
        await db.flush()
        changes.promote()
        await db.commit()
        changes.schedule_cleanup(background_tasks)
        ```

    ``revert()`` undoes ``promote()`` when the commit fails.
    """

    def __init__(self, storage: MediaStorage) -> None:
        self.storage = storage
        self._staging: Optional[Path] = None
        self._installs: List[Tuple[Path, Path]] = []
        self._renames: List[Tuple[Path, Path]] = []
        self._deletes: List[Path] = []
        self._moved: List[Tuple[Path, Path]] = []

    @property
    def staging(self) -> Path:
        if self._staging is None:
            self._staging = self.storage.new_staging_dir()
        return self._staging

    async def stage_uploads(
        self,
        slot: MediaSlot,
        key: str,
        uploads: List[UploadFile],
    ) -> List[str]:
        """Convert uploads into the staging area.

        Args:
            slot: Destination layout.
            key: Natural key naming the file or directory.
            uploads: Uploaded files; pictures and PDFs use the first one.

        Returns:
            Public URLs the files will have once promoted.
        """
        relative = slot.target(key)
        staged = self.staging / "new" / relative
        urls = []

        if slot.kind == GALLERY:
            for upload in uploads:
                filename = f"{uuid.uuid4().hex}.webp"
                data = await self.storage.read_upload(upload)
                self.storage.convert_to_webp(data, staged / filename)
                urls.append(self.storage.url_for(f"{relative}/{filename}"))
        else:
            data = await self.storage.read_upload(uploads[0])
            if slot.kind == PDF:
                self.storage.save_pdf(data, staged)
            else:
                self.storage.convert_to_webp(data, staged)
            urls.append(self.storage.url_for(relative))

        self._installs.append((staged, self.storage.path_for(relative)))
        return urls

    def rename(self, old_relative: str, new_relative: str) -> None:
        """Move existing media to a new location on promotion."""
        if old_relative != new_relative:
            self._renames.append(
                (self.storage.path_for(old_relative), self.storage.path_for(new_relative))
            )

    def delete(self, relative: str) -> None:
        """Remove existing media after the commit."""
        self._deletes.append(self.storage.path_for(relative))

    def _move(self, source: Path, destination: Path) -> None:
        if self.storage.rename_path(source, destination):
            self._moved.append((source, destination))

    def _set_aside(self, path: Path) -> None:
        if path.exists():
            self._move(path, self.staging / "old" / uuid.uuid4().hex)

    def promote(self) -> None:
        """Move staged files into place, setting replaced files aside."""
        try:
            for old, new in self._renames:
                self._set_aside(new)
                self._move(old, new)
            for staged, final in self._installs:
                self._set_aside(final)
                self._move(staged, final)
        except OSError as e:
            self.revert()
            raise MediaException(f"Failed to store media: {e}")

    def revert(self) -> None:
        """Undo promoted moves and drop the staging area."""
        while self._moved:
            source, destination = self._moved.pop()
            try:
                self.storage.rename_path(destination, source)
            except OSError as e:
                logger.warning(f"Could not restore {source}: {e}")
        if self._staging is not None:
            self.storage.discard(self._staging)
            self._staging = None

    def schedule_cleanup(self, background_tasks: BackgroundTasks) -> None:
        """Queue removal of superseded media and the staging area."""
        for path in self._deletes:
            background_tasks.add_task(self.storage.discard, path)
        if self._staging is not None:
            background_tasks.add_task(self.storage.discard, self._staging)
        self._moved.clear()
