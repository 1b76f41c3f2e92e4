"""Tests for media storage and staged media changes."""

import asyncio
import io

import pytest
from fastapi import BackgroundTasks, UploadFile
from PIL import Image

from conftest import image_bytes
from realty_api.core.exceptions import InvalidMediaException, MediaException
from realty_api.services.media import (
    GALLERY,
    PDF,
    PICTURE,
    MediaChangeSet,
    MediaSlot,
    MediaStorage,
)

pytestmark = pytest.mark.media

GALLERY_SLOT = MediaSlot(field="images", attr="images", kind=GALLERY, directory="images/properties")
PICTURE_SLOT = MediaSlot(field="image", attr="image_url", kind=PICTURE, directory="images/agents")


def upload(data: bytes, filename: str = "photo.png", size=None) -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename=filename, size=size)


class UnreadableFile(io.BytesIO):
    def read(self, *args):
        raise AssertionError("upload body should not be read")


def run_background(tasks: BackgroundTasks) -> None:
    asyncio.run(tasks())


class TestMediaSlot:

    def test_gallery_target_is_a_directory(self):
        assert GALLERY_SLOT.target("Marina-Heights") == "images/properties/Marina-Heights"

    def test_changed_key_gets_a_digest(self):
        target = GALLERY_SLOT.target("Marina Heights")
        assert target.startswith("images/properties/Marina_Heights~")
        assert target != GALLERY_SLOT.target("Marina_Heights")

    def test_picture_target_is_a_webp_file(self):
        assert PICTURE_SLOT.target("Sara") == "images/agents/Sara.webp"
        assert PICTURE_SLOT.target("Sara Khan").endswith(".webp")

    def test_pdf_target(self):
        slot = MediaSlot(field="pdf", attr="pdf_url", kind=PDF, directory="factSheets")
        assert slot.target("Creek") == "factSheets/Creek.pdf"


class TestMediaStorage:

    def test_convert_to_webp(self, storage: MediaStorage):
        destination = storage.path_for("images/test/photo.webp")

        size = storage.convert_to_webp(image_bytes(fmt="JPEG"), destination)

        assert size > 0
        with Image.open(destination) as converted:
            assert converted.format == "WEBP"

    def test_convert_palette_image(self, storage: MediaStorage):
        buffer = io.BytesIO()
        Image.new("P", (8, 8)).save(buffer, format="GIF")
        destination = storage.path_for("images/test/palette.webp")

        storage.convert_to_webp(buffer.getvalue(), destination)

        assert destination.exists()

    def test_non_image_is_rejected(self, storage: MediaStorage):
        with pytest.raises(InvalidMediaException) as exc_info:
            storage.convert_to_webp(b"not an image", storage.path_for("images/x.webp"))
        assert exc_info.value.status_code == 400

    def test_non_pdf_is_rejected(self, storage: MediaStorage):
        with pytest.raises(InvalidMediaException):
            storage.save_pdf(b"plain text", storage.path_for("factSheets/x.pdf"))

    def test_pdf_is_written(self, storage: MediaStorage):
        destination = storage.path_for("factSheets/x.pdf")
        storage.save_pdf(b"%PDF-1.4 test", destination)
        assert destination.read_bytes() == b"%PDF-1.4 test"

    def test_path_outside_root_is_refused(self, storage: MediaStorage):
        with pytest.raises(MediaException):
            storage.path_for("../outside.txt")

    def test_url_for(self, storage: MediaStorage):
        assert storage.url_for("images/agents/a.webp") == "http://testserver/uploads/images/agents/a.webp"

    def test_rename_and_delete_missing_paths_are_noops(self, storage: MediaStorage):
        missing = storage.path_for("images/missing")
        assert storage.rename_path(missing, storage.path_for("images/other")) is False
        assert storage.delete_path(missing) is False

    def test_delete_directory_tree(self, storage: MediaStorage):
        directory = storage.path_for("images/properties/Alpha")
        directory.mkdir(parents=True)
        (directory / "a.webp").write_bytes(b"x")

        assert storage.delete_path(directory) is True
        assert not directory.exists()

    def test_upload_too_large(self, tmp_path):
        small = MediaStorage(tmp_path / "small", "http://testserver", max_bytes=10)
        with pytest.raises(InvalidMediaException):
            asyncio.run(small.read_upload(upload(b"x" * 11)))

    def test_declared_size_is_checked_before_reading(self, tmp_path):
        small = MediaStorage(tmp_path / "small", "http://testserver", max_bytes=10)
        big = UploadFile(file=UnreadableFile(), filename="big.png", size=100)

        with pytest.raises(InvalidMediaException) as exc_info:
            asyncio.run(small.read_upload(big))

        assert exc_info.value.details == {"max_bytes": 10}

    def test_upload_within_limit_is_read(self, tmp_path):
        small = MediaStorage(tmp_path / "small", "http://testserver", max_bytes=10)

        assert asyncio.run(small.read_upload(upload(b"x" * 10, size=10))) == b"x" * 10


class TestMediaChangeSet:

    def test_promote_moves_staged_gallery_into_place(self, storage: MediaStorage):
        changes = MediaChangeSet(storage)
        urls = asyncio.run(
            changes.stage_uploads(GALLERY_SLOT, "Alpha", [upload(image_bytes()), upload(image_bytes("blue"))])
        )
        final = storage.path_for("images/properties/Alpha")
        assert not final.exists()

        changes.promote()

        assert len(urls) == 2
        assert sorted(p.name for p in final.iterdir()) == sorted(u.rsplit("/", 1)[-1] for u in urls)

    def test_replacing_a_picture_cleans_up_the_old_one(self, storage: MediaStorage):
        picture = storage.path_for("images/agents/Sara.webp")
        storage.convert_to_webp(image_bytes("green"), picture)

        changes = MediaChangeSet(storage)
        asyncio.run(changes.stage_uploads(PICTURE_SLOT, "Sara", [upload(image_bytes("blue"))]))
        staging = changes.staging
        changes.promote()
        tasks = BackgroundTasks()
        changes.schedule_cleanup(tasks)
        run_background(tasks)

        with Image.open(picture) as current:
            red, green, blue = current.convert("RGB").getpixel((0, 0))
        assert blue > 200 and green < 80
        assert not staging.exists()

    def test_revert_restores_renamed_directory(self, storage: MediaStorage):
        old = storage.path_for("images/properties/Alpha")
        old.mkdir(parents=True)
        (old / "a.webp").write_bytes(b"x")

        changes = MediaChangeSet(storage)
        changes.rename("images/properties/Alpha", "images/properties/Beta")
        changes.promote()
        assert not old.exists()

        changes.revert()

        assert (old / "a.webp").exists()
        assert not storage.path_for("images/properties/Beta").exists()

    def test_revert_before_promote_drops_staging(self, storage: MediaStorage):
        changes = MediaChangeSet(storage)
        asyncio.run(changes.stage_uploads(PICTURE_SLOT, "Sara", [upload(image_bytes())]))
        staging = changes.staging

        changes.revert()

        assert not staging.exists()
        assert not storage.path_for("images/agents/Sara.webp").exists()

    def test_invalid_upload_fails_staging(self, storage: MediaStorage):
        changes = MediaChangeSet(storage)
        with pytest.raises(InvalidMediaException):
            asyncio.run(changes.stage_uploads(GALLERY_SLOT, "Alpha", [upload(b"nope", "x.txt")]))
        changes.revert()
