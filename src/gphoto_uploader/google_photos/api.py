# photos API logic
import json
import logging
from dataclasses import dataclass

import requests

from gphoto_uploader.config import EndpointSettings
from gphoto_uploader.exceptions import UploadError, UploadFailure, UploadPhase
from gphoto_uploader.google_photos.auth import TokenManager
from gphoto_uploader.photos import PhotoAsset

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Success"


@dataclass(frozen=True)
class MediaItemResult:
    """Media item created by batchCreate."""

    product_url: str
    filename: str
    success: bool = True


class PhotoUploader:
    """
    Uploads photos with the two-phase Google Photos protocol.

    Phase 1 posts the raw bytes and receives an upload token. Phase 2 turns the
    upload token into a media item. A fresh access token is requested from the
    TokenManager before each phase.

    Uploads are not deduplicated: every call creates a new media item, so a
    failed call should not be retried blindly. A phase 2 failure leaves the
    phase 1 upload token unused on the server.
    """

    def __init__(
        self,
        token_manager: TokenManager,
        endpoints: EndpointSettings | None = None,
        timeout: float = 60.0,
    ):
        self.token_manager = token_manager
        self.endpoints = endpoints or EndpointSettings()
        self.timeout = timeout

    def upload(self, asset: PhotoAsset) -> str:
        """Upload a photo and return the permanent product URL of the new media item."""
        return self.upload_media_item(asset).product_url

    def upload_media_item(self, asset: PhotoAsset) -> MediaItemResult:
        """
        Upload a photo and return the created media item.

        Raises:
            AuthError: If no access token could be obtained (no request is sent)
            UploadError: If either phase fails; phase and reason identify which
        """
        upload_token = self.upload_bytes(asset)
        return self.create_media_item(upload_token)

    def upload_bytes(self, asset: PhotoAsset) -> str:
        """Phase 1: upload raw bytes, return the upload token."""
        phase = UploadPhase.BINARY_UPLOAD
        headers = {
            "Authorization": f"Bearer {self.token_manager.get_access_token()}",
            "Content-Type": "application/octet-stream",
            "X-Goog-Upload-Protocol": "raw",
            "X-Goog-Upload-File-Name": asset.identifier,
        }
        logger.debug(f"Uploading {len(asset.content)} bytes for {asset.identifier}")
        try:
            r = requests.post(
                self.endpoints.upload_endpoint,
                data=asset.content,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UploadError(
                phase, UploadFailure.TRANSPORT, f"Upload request failed: {type(e).__name__}: {e}"
            ) from e

        if r.status_code != 200:
            raise UploadError(
                phase,
                UploadFailure.HTTP_STATUS,
                "Upload was not accepted",
                status_code=r.status_code,
                body=r.text,
            )
        if not r.text:
            raise UploadError(
                phase,
                UploadFailure.MALFORMED_RESPONSE,
                "Upload response carried no upload token",
                status_code=r.status_code,
            )
        return r.text  # uploadToken

    def create_media_item(self, upload_token: str) -> MediaItemResult:
        """Phase 2: create a media item from an upload token."""
        phase = UploadPhase.MEDIA_ITEM_CREATION
        # Re-fetched rather than reused: the token may have expired during phase 1
        headers = {
            "Authorization": f"Bearer {self.token_manager.get_access_token()}",
            "Content-Type": "application/json",
        }
        body = {"newMediaItems": [{"simpleMediaItem": {"uploadToken": upload_token}}]}
        try:
            r = requests.post(
                self.endpoints.batch_create_endpoint,
                headers=headers,
                data=json.dumps(body),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UploadError(
                phase,
                UploadFailure.TRANSPORT,
                f"Media item creation request failed: {type(e).__name__}: {e}",
            ) from e

        if r.status_code != 200:
            raise UploadError(
                phase,
                UploadFailure.HTTP_STATUS,
                "Media item creation was not accepted",
                status_code=r.status_code,
                body=r.text,
            )
        return _parse_batch_create(r.status_code, r.text)


def _parse_batch_create(status_code: int, text: str) -> MediaItemResult:
    phase = UploadPhase.MEDIA_ITEM_CREATION

    def malformed(message: str) -> UploadError:
        return UploadError(
            phase, UploadFailure.MALFORMED_RESPONSE, message, status_code=status_code, body=text
        )

    try:
        resp = json.loads(text)
    except ValueError as e:
        raise malformed("Media item creation response is not JSON") from e

    results = resp.get("newMediaItemResults") if isinstance(resp, dict) else None
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        raise malformed("Media item creation response has no newMediaItemResults")

    first = results[0]
    status = first.get("status")
    if not isinstance(status, dict):
        status = {}
    if status.get("message") != SUCCESS_MESSAGE:
        raise UploadError(
            phase,
            UploadFailure.SERVER_REPORTED,
            f"Media item creation failed: {status.get('message', 'no status message')}",
            status_code=status_code,
            body=text,
        )

    item = first.get("mediaItem")
    if not isinstance(item, dict):
        item = {}
    product_url = item.get("productUrl")
    if not isinstance(product_url, str) or not product_url:
        raise malformed("Created media item has no productUrl")

    filename = item.get("filename")
    return MediaItemResult(
        product_url=product_url, filename=filename if isinstance(filename, str) else ""
    )
