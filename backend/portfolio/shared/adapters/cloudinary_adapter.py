"""
Cloudinary adapter - Remote media storage.

Provides:
- Uploads (images, videos with an eager thumbnail)
- Single-object deletion by public_id
- Folder deletion (not-found tolerated)
- Prefix listing of stored public_ids

The Cloudinary SDK is synchronous; every call is pushed to a worker thread
and bounded by CLOUDINARY_TIMEOUT_SECONDS so one slow call cannot stall
the event loop or its sibling calls. Any SDK error, non-ok result or
timeout surfaces as MediaStoreError.
"""

import asyncio
from dataclasses import dataclass, field
import functools
import logging
from typing import Any, Callable, Optional, Protocol, TypeVar, Union

import cloudinary
import cloudinary.api
import cloudinary.exceptions
import cloudinary.uploader

from ...config.settings import settings
from ..core.exceptions import MediaStoreError
from ..models.enums import MediaType
from ..utils.constants import VIDEO_THUMBNAIL_TRANSFORMATION

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Cloudinary caps a single resources() page at 500
_PAGE_SIZE = 500


@dataclass
class UploadResult:
    """Asset properties reported by Cloudinary after an upload."""

    public_id: str
    url: str
    resource_type: str
    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[str] = None
    bytes: Optional[int] = None
    duration: Optional[float] = None
    bitrate: Optional[int] = None
    frame_rate: Optional[float] = None
    thumbnail_url: Optional[str] = None

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "UploadResult":
        eager = response.get("eager") or []
        return cls(
            public_id=response["public_id"],
            url=response.get("secure_url") or response.get("url", ""),
            resource_type=response.get("resource_type", MediaType.IMAGE.value),
            width=response.get("width"),
            height=response.get("height"),
            format=response.get("format"),
            bytes=response.get("bytes"),
            duration=response.get("duration"),
            bitrate=response.get("bit_rate"),
            frame_rate=(response.get("video") or {}).get("frame_rate") or response.get("frame_rate"),
            thumbnail_url=eager[0].get("secure_url") if eager else None,
        )


@dataclass
class SearchResult:
    """Public ids found under a prefix; ``truncated`` when the cap was hit."""

    public_ids: set[str] = field(default_factory=set)
    truncated: bool = False


class MediaStore(Protocol):
    """Remote media capability used by the services."""

    async def upload(
        self,
        data: bytes,
        *,
        folder: str,
        resource_type: Union[MediaType, str] = MediaType.IMAGE,
        public_id: Optional[str] = None,
    ) -> UploadResult: ...

    async def delete(self, public_id: str, resource_type: Union[MediaType, str] = MediaType.IMAGE) -> None: ...

    async def delete_folder(self, path: str) -> bool: ...

    async def search(self, prefix: str, max_results: int = 500) -> SearchResult: ...


class CloudinaryAdapter:
    """
    Adapter for Cloudinary operations.

    Handles:
    - SDK configuration from settings
    - Thread offloading with a per-call timeout
    - Mapping SDK failures to MediaStoreError
    """

    def __init__(
        self,
        cloud_name: Optional[str] = None,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.cloud_name = cloud_name or settings.CLOUDINARY_CLOUD_NAME
        self.api_key = api_key or settings.CLOUDINARY_API_KEY
        self.api_secret = api_secret or settings.CLOUDINARY_API_SECRET
        self.timeout = timeout or settings.CLOUDINARY_TIMEOUT_SECONDS
        self._configured = False

    def configure(self) -> None:
        """Apply credentials to the global SDK configuration (idempotent)."""
        if self._configured:
            return
        cloudinary.config(
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            api_secret=self.api_secret,
            secure=True,
        )
        self._configured = True
        logger.info("Cloudinary configured for cloud %s", self.cloud_name)

    async def _call(self, operation: str, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        self.configure()
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(func, *args, **kwargs),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            raise MediaStoreError(
                f"Cloudinary {operation} timed out after {self.timeout}s",
                details={"operation": operation},
            )
        except cloudinary.exceptions.Error as e:
            raise MediaStoreError(
                f"Cloudinary {operation} failed: {e}",
                details={"operation": operation},
            )

    # ═══════════════════════════════════════════════════════════════════════════
    # UPLOAD
    # ═══════════════════════════════════════════════════════════════════════════

    async def upload(
        self,
        data: bytes,
        *,
        folder: str,
        resource_type: Union[MediaType, str] = MediaType.IMAGE,
        public_id: Optional[str] = None,
    ) -> UploadResult:
        """
        Upload raw bytes into ``folder``.

        Videos get an eager 400x300 jpg thumbnail taken one second in.

        Args:
            data: File content
            folder: Target folder, e.g. "portfolio/summer-wedding"
            resource_type: "image" or "video"
            public_id: Explicit public_id (Cloudinary generates one otherwise)
        """
        resource_type = MediaType(resource_type)
        options: dict[str, Any] = {
            "folder": folder,
            "resource_type": resource_type.value,
            "overwrite": False,
        }
        if public_id:
            options["public_id"] = public_id
        if resource_type == MediaType.VIDEO:
            options["eager"] = [VIDEO_THUMBNAIL_TRANSFORMATION]

        response = await self._call("upload", cloudinary.uploader.upload, data, **options)
        result = UploadResult.from_response(response)
        logger.info("Uploaded %s %s", resource_type.value, result.public_id)
        return result

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete(self, public_id: str, resource_type: Union[MediaType, str] = MediaType.IMAGE) -> None:
        """
        Destroy one remote object.

        Raises:
            MediaStoreError: On SDK error, timeout, or any result other than "ok"
                (including "not found")
        """
        response = await self._call(
            "delete",
            cloudinary.uploader.destroy,
            public_id,
            resource_type=MediaType(resource_type).value,
            invalidate=True,
        )
        result = (response or {}).get("result")
        if result != "ok":
            raise MediaStoreError(
                f"Cloudinary delete returned '{result}'",
                remote_id=public_id,
            )

    async def delete_folder(self, path: str) -> bool:
        """
        Delete an (empty) folder.

        Returns:
            True if deleted, False if the folder did not exist
        """
        self.configure()
        try:
            await asyncio.wait_for(
                asyncio.to_thread(cloudinary.api.delete_folder, path),
                timeout=self.timeout,
            )
        except cloudinary.exceptions.NotFound:
            return False
        except asyncio.TimeoutError:
            raise MediaStoreError(f"Cloudinary delete_folder timed out for {path}")
        except cloudinary.exceptions.Error as e:
            raise MediaStoreError(f"Cloudinary delete_folder failed for {path}: {e}")
        return True

    # ═══════════════════════════════════════════════════════════════════════════
    # SEARCH
    # ═══════════════════════════════════════════════════════════════════════════

    async def search(self, prefix: str, max_results: int = 500) -> SearchResult:
        """
        List image public_ids under ``prefix``, following pagination.

        Stops at ``max_results``; ``truncated`` is set when more remained.
        """
        found = SearchResult()
        cursor: Optional[str] = None

        while True:
            remaining = max_results - len(found.public_ids)
            params: dict[str, Any] = {
                "type": "upload",
                "resource_type": MediaType.IMAGE.value,
                "prefix": prefix,
                "max_results": min(_PAGE_SIZE, remaining),
            }
            if cursor:
                params["next_cursor"] = cursor

            response = await self._call("search", cloudinary.api.resources, **params)
            for resource in response.get("resources", []):
                found.public_ids.add(resource["public_id"])

            cursor = response.get("next_cursor")
            if not cursor:
                break
            if len(found.public_ids) >= max_results:
                found.truncated = True
                break

        return found


@functools.lru_cache(maxsize=1)
def get_cloudinary_adapter() -> CloudinaryAdapter:
    """Get or create Cloudinary adapter singleton."""
    return CloudinaryAdapter()
