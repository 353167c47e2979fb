"""
Entry point for running gphoto_uploader as a module.

Usage:
    python -m gphoto_uploader <photos_dir>
    python -m gphoto_uploader --config /path/to/config.yaml <photos_dir>
"""

import argparse
import logging
import sys
from pathlib import Path

from gphoto_uploader.config import Settings, load_credentials
from gphoto_uploader.exceptions import AuthError
from gphoto_uploader.google_photos import MediaItemResult, PhotoUploader, TokenManager
from gphoto_uploader.photos import PhotoAsset, find_photo_paths
from gphoto_uploader.runner import upload_all


def confirm(prompt: str) -> bool:
    """Ask a yes/no question on the terminal. Anything but y/yes is a no."""
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def remove_source(asset: PhotoAsset, item: MediaItemResult) -> None:
    """Delete an uploaded photo's source file."""
    if asset.path is None:
        return
    logger = logging.getLogger(__name__)
    try:
        asset.path.unlink()
        logger.info(f"Deleted source: {asset.path}")
    except OSError as e:
        logger.warning(f"Failed to delete {asset.path}: {e}")


def load_settings(config_path: Path | None) -> Settings:
    if config_path is None:
        return Settings()
    return Settings.from_yaml(config_path)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="gphoto-uploader",
        description="Upload the photos in a directory to Google Photos",
    )
    parser.add_argument("photos_dir", type=Path, help="Directory to search for photos")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: environment and built-in defaults)",
    )
    parser.add_argument(
        "--credentials",
        type=Path,
        default=None,
        help="Path to the OAuth credentials JSON file (overrides credentials_path)",
    )
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Skip photos that fail to upload instead of stopping the run",
    )
    parser.add_argument(
        "--remove",
        "-r",
        action="store_true",
        help="Remove uploaded photos",
    )
    parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Answer 'yes' to all choices automatically",
    )
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger(__name__)

    try:
        paths = find_photo_paths(args.photos_dir, settings.image_extensions)
    except (FileNotFoundError, NotADirectoryError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not paths:
        print("No photo was found")
        return 0

    credentials_path = args.credentials or settings.credentials_path
    try:
        credentials = load_credentials(credentials_path)
    except AuthError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    remove = args.remove or settings.delete_source_after_upload
    if remove and not args.yes:
        if not confirm(f"{len(paths)} photo(s) will be deleted after upload. Continue?"):
            print("Aborted")
            return 1

    token_manager = TokenManager(
        credentials,
        settings.endpoints,
        timeout=settings.request_timeout_seconds,
    )
    uploader = PhotoUploader(
        token_manager,
        settings.endpoints,
        timeout=settings.request_timeout_seconds,
    )

    logger.info(f"Found {len(paths)} photo(s) in {args.photos_dir}")
    result = upload_all(
        paths,
        uploader,
        continue_on_error=args.continue_on_error or settings.continue_on_error,
        on_uploaded=remove_source if remove else None,
    )

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
