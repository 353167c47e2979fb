# batch upload loop
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from gphoto_uploader.exceptions import GooglePhotosError
from gphoto_uploader.google_photos.api import MediaItemResult, PhotoUploader
from gphoto_uploader.photos import PhotoAsset

logger = logging.getLogger(__name__)


@dataclass
class UploadRunResult:
    """Result of a batch upload run."""

    attempted: int = 0
    uploaded: int = 0
    failed: int = 0
    aborted: bool = False
    # (photo name, result) in upload order; the same photo may appear more than once
    uploads: list[tuple[str, MediaItemResult]] = field(default_factory=list)
    failures: list[tuple[str, Exception]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.failed == 0

    @property
    def urls(self) -> list[str]:
        return [item.product_url for _, item in self.uploads]


def upload_all(
    photos: Iterable[PhotoAsset | Path],
    uploader: PhotoUploader,
    continue_on_error: bool = False,
    on_uploaded: Callable[[PhotoAsset, MediaItemResult], None] | None = None,
) -> UploadRunResult:
    """
    Upload photos one after another.

    Each photo goes through both upload phases before the next one starts.
    Paths are read right before their upload, so only one file's bytes are
    held at a time. By default the first failure stops the run and the
    remaining photos are not attempted; with continue_on_error the failure is
    recorded and the run moves on. An unreadable file counts as a failure.

    Args:
        photos: Photos or photo file paths to upload, in order
        uploader: PhotoUploader to use
        continue_on_error: Skip failed photos instead of aborting
        on_uploaded: Called with the asset and media item after each success

    Returns:
        UploadRunResult with per-photo results and errors
    """
    result = UploadRunResult()

    for photo in photos:
        name = str(photo) if isinstance(photo, Path) else photo.display_name
        result.attempted += 1
        logger.info(f"Uploading {name}...")
        try:
            asset = PhotoAsset.from_path(photo) if isinstance(photo, Path) else photo
            item = uploader.upload_media_item(asset)
        except (GooglePhotosError, OSError) as e:
            result.failed += 1
            result.failures.append((name, e))
            logger.error(f"Failed to upload photo: {name}: {e}")
            if not continue_on_error:
                result.aborted = True
                break
            continue

        result.uploaded += 1
        result.uploads.append((name, item))
        logger.info(f"Uploaded {name} -> {item.product_url}")
        if on_uploaded is not None:
            on_uploaded(asset, item)

    logger.info(
        f"Upload run finished: {result.attempted} attempted, "
        f"{result.uploaded} uploaded, {result.failed} failed"
        + (" (aborted)" if result.aborted else "")
    )
    return result
