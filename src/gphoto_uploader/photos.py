# photo discovery
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_EXTENSIONS = (".png", ".jpg")


@dataclass(frozen=True)
class PhotoAsset:
    """A photo ready for upload."""

    identifier: str  # file name without extension
    content: bytes = field(repr=False)
    path: Path | None = None

    @classmethod
    def from_path(cls, p: Path | str) -> "PhotoAsset":
        p = Path(p)
        return cls(identifier=p.stem, content=p.read_bytes(), path=p)

    @property
    def display_name(self) -> str:
        return str(self.path) if self.path is not None else self.identifier


def find_photo_paths(
    root: Path | str, extensions: Iterable[str] = DEFAULT_IMAGE_EXTENSIONS
) -> list[Path]:
    """
    Recursively collect photo files below a directory.

    Args:
        root: Directory to scan
        extensions: Accepted file extensions, matched case-insensitively

    Returns:
        Sorted list of matching file paths

    Raises:
        FileNotFoundError: If root does not exist
        NotADirectoryError: If root is not a directory
    """
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Photos directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    wanted = {e.lower() for e in extensions}
    paths = sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in wanted)
    logger.debug(f"Found {len(paths)} photo(s) under {root}")
    return paths
