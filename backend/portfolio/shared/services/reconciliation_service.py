"""
Reconciliation Service

Keeps the local catalogue (PostgreSQL) and the remote media store
(Cloudinary) in agreement when media is removed.

Operations:
===========
- delete_media()       → one image or video
- delete_media_any()   → one media row whose type is not known up front
- bulk_delete()        → up to BULK_DELETE_LIMIT images or videos
- delete_category()    → a category, its subcategories and all their media
- sweep_orphans()      → local image rows whose remote object is gone

Ordering Policy:
================
    ┌──────────────┐     ┌──────────────┐     ┌──────────────┐     ┌─────────────┐
    │ resolve rows │ ──▶ │ remote delete│ ──▶ │ local delete │ ──▶ │ invalidate  │
    │ (404 if none)│     │ settle-all   │     │ + commit     │     │ cache       │
    └──────────────┘     └──────────────┘     └──────────────┘     └─────────────┘

Remote deletions run first and concurrently; a failure is recorded against
the media item it concerns and never stops its siblings or the local
delete. The local delete then removes every resolved row regardless of
remote outcome. A local orphan (row pointing at deleted remote media)
breaks public pages; a remote orphan only costs storage.

If the local transaction of a category delete fails, the remote deletions
already performed are not undone.

Usage:
======
    service = ReconciliationService(db, media_store, cache)
    outcome = await service.bulk_delete(request, MediaType.IMAGE)
    print(outcome.local_deleted_count, len(outcome.remote_deleted))
"""

import asyncio
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.config.settings import settings
from portfolio.shared.adapters.cloudinary_adapter import MediaStore
from portfolio.shared.core.exceptions import (
    CategoryNotFoundError,
    MediaNotFoundError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from portfolio.shared.core.logging import get_logger
from portfolio.shared.models.category import Category
from portfolio.shared.models.enums import MediaType
from portfolio.shared.repositories.category_repository import CategoryRepository
from portfolio.shared.repositories.media_repository import (
    ImageRepository,
    RemoteRef,
    media_repository,
)
from portfolio.shared.schemas.deletion import BulkDeleteRequest, MediaTarget
from portfolio.shared.services.cache_service import CacheInvalidator, media_invalidation
from portfolio.shared.utils.constants import REASON_NO_REMOTE_ID, REASON_REMOTE_DELETE_FAILED

logger = get_logger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# OUTCOMES
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class RemoteTarget:
    """A media row scheduled for remote deletion."""

    id: UUID
    remote_id: Optional[str]
    media_type: MediaType


@dataclass
class RemoteFailure:
    id: UUID
    reason: str


@dataclass
class DeletionOutcome:
    """Result of a single or bulk media deletion."""

    requested_ids: list[UUID]
    found_count: int = 0
    remote_deleted: list[UUID] = field(default_factory=list)
    remote_failed: list[RemoteFailure] = field(default_factory=list)
    local_deleted_count: int = 0


@dataclass
class CategoryDeletionReport:
    deleted_images: int = 0
    deleted_videos: int = 0
    deleted_subcategories: int = 0
    remote_deleted: list[UUID] = field(default_factory=list)
    remote_failed: list[RemoteFailure] = field(default_factory=list)
    deleted_folders: list[str] = field(default_factory=list)

    @property
    def deleted_media(self) -> int:
        return self.deleted_images + self.deleted_videos


@dataclass
class OrphanReport:
    """
    Local rows whose remote object was missing from the listing.

    ``truncated`` means the listing hit its cap; nothing was deleted.
    """

    orphans: list[RemoteRef] = field(default_factory=list)
    deleted_count: int = 0
    truncated: bool = False


# ═══════════════════════════════════════════════════════════════════════════════
# SERVICE
# ═══════════════════════════════════════════════════════════════════════════════


class ReconciliationService:
    """
    Deletion workflows spanning the database and the media store.

    Attributes:
        session: Request database session; committed by each workflow
        media_store: Remote media capability (CloudinaryAdapter in production)
        cache: Invalidation target notified after each successful mutation
    """

    def __init__(
        self,
        session: AsyncSession,
        media_store: MediaStore,
        cache: Optional[CacheInvalidator] = None,
    ) -> None:
        self.session = session
        self.media_store = media_store
        self.cache = cache
        self.categories = CategoryRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # SINGLE MEDIA
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete_media(
        self,
        media_id: UUID,
        media_type: Union[MediaType, str],
    ) -> DeletionOutcome:
        """
        Delete one image or video.

        Exactly one remote attempt is made when the row has a remote id; the
        row is removed whatever the remote outcome.

        Raises:
            MediaNotFoundError: If no row of that type has this id
        """
        media_type = MediaType(media_type)
        repo = media_repository(media_type, self.session)

        row = await repo.get(media_id)
        if row is None:
            raise MediaNotFoundError(str(media_id), media_type.value)

        category_ids = {row.category_id}
        target = RemoteTarget(row.id, row.cloudinary_id, media_type)
        outcome = DeletionOutcome(requested_ids=[media_id], found_count=1)

        outcome.remote_deleted, outcome.remote_failed = await self._delete_remote([target])
        outcome.local_deleted_count = await repo.delete_by_ids([row.id])
        await self.session.commit()

        logger.info(
            "Media deleted",
            media_id=str(media_id),
            media_type=media_type.value,
            remote_deleted=bool(outcome.remote_deleted),
        )
        await self._notify_media(media_type, category_ids)
        return outcome

    async def delete_media_any(self, media_id: UUID) -> tuple[MediaType, DeletionOutcome]:
        """
        Delete a media row of unknown type (images are checked first).

        Returns:
            (resolved media type, outcome)
        """
        for media_type in (MediaType.IMAGE, MediaType.VIDEO):
            if await media_repository(media_type, self.session).exists(media_id):
                return media_type, await self.delete_media(media_id, media_type)
        raise MediaNotFoundError(str(media_id))

    # ═══════════════════════════════════════════════════════════════════════════
    # BULK
    # ═══════════════════════════════════════════════════════════════════════════

    async def bulk_delete(
        self,
        request: BulkDeleteRequest,
        media_type: Union[MediaType, str],
    ) -> DeletionOutcome:
        """
        Delete up to BULK_DELETE_LIMIT media rows of one type.

        Ids-only requests are resolved locally and fail with NotFound when
        nothing resolves. Pair requests use the caller's remote ids as given.
        Duplicate ids collapse to one target.

        Raises:
            ValidationError: Empty or oversized batch (before any lookup)
            NotFoundError: Ids-only request with no matching rows
        """
        media_type = MediaType(media_type)
        repo = media_repository(media_type, self.session)
        targets = self._normalize(request)
        requested_ids = [t.id for t in targets]

        limit = settings.BULK_DELETE_LIMIT
        if not targets:
            raise ValidationError(f"No {media_type.value} ids provided")
        if len(targets) > limit:
            raise ValidationError(
                f"Cannot delete more than {limit} {media_type.value}s at once",
                details={"limit": limit, "received": len(targets)},
            )

        refs = await repo.get_remote_refs(requested_ids)
        if request.ids_only:
            if not refs:
                raise NotFoundError(f"{media_type.value.capitalize()}s matching the given ids")
            remote_targets = [RemoteTarget(r.id, r.remote_id, media_type) for r in refs]
        else:
            remote_targets = [RemoteTarget(t.id, t.remote_id, media_type) for t in targets]

        outcome = DeletionOutcome(requested_ids=requested_ids, found_count=len(refs))
        outcome.remote_deleted, outcome.remote_failed = await self._delete_remote(remote_targets)

        # One statement for every target, after all remote attempts settled
        outcome.local_deleted_count = await repo.delete_by_ids(t.id for t in remote_targets)
        await self.session.commit()

        logger.info(
            "Bulk delete completed",
            media_type=media_type.value,
            requested=len(requested_ids),
            found=outcome.found_count,
            deleted_count=outcome.local_deleted_count,
            remote_deleted=len(outcome.remote_deleted),
            remote_failed=len(outcome.remote_failed),
        )
        await self._notify_media(media_type, {r.category_id for r in refs})
        return outcome

    @staticmethod
    def _normalize(request: BulkDeleteRequest) -> list[MediaTarget]:
        """Collapse both request shapes into de-duplicated targets (first wins)."""
        if request.ids_only:
            items: Iterable[MediaTarget] = (MediaTarget(id=i) for i in request.ids or [])
        else:
            items = request.items or []

        unique: dict[UUID, MediaTarget] = {}
        for item in items:
            unique.setdefault(item.id, item)
        return list(unique.values())

    # ═══════════════════════════════════════════════════════════════════════════
    # CATEGORY
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete_category(self, category_id: UUID) -> CategoryDeletionReport:
        """
        Delete a category with its subcategories and every media row they own.

        Flow:
            1. Load category + media + one level of subcategories (+ media)
            2. Remote-delete the full media set (settle-all)
            3. One transaction: sub media, subcategories, own media, category
            4. Best-effort folder cleanup for every subcategory key and the key

        Raises:
            CategoryNotFoundError: If the category does not exist
            PersistenceError: If the local transaction fails (rolled back)
        """
        category = await self.categories.get_subtree(category_id)
        if category is None:
            raise CategoryNotFoundError(str(category_id))

        subcategories = list(category.subcategories)
        owners = [category, *subcategories]
        targets = [
            RemoteTarget(media.id, media.cloudinary_id, media_type)
            for owner in owners
            for media_type, items in ((MediaType.IMAGE, owner.images), (MediaType.VIDEO, owner.videos))
            for media in items
        ]
        folders = [self._folder_for(sub.key) for sub in subcategories]
        folders.append(self._folder_for(category.key))
        touched = [*owners, category.parent]

        report = CategoryDeletionReport()
        report.remote_deleted, report.remote_failed = await self._delete_remote(targets)

        try:
            counts = await self.categories.delete_tree(category.id, [s.id for s in subcategories])
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Category delete transaction failed",
                category_id=str(category_id),
                remote_deleted=len(report.remote_deleted),
                error=str(e),
            )
            raise PersistenceError(
                "Failed to delete category and its content",
                details={
                    "category_id": str(category_id),
                    "cloudinary_images_deleted": len(report.remote_deleted),
                },
            )

        report.deleted_images = counts.images
        report.deleted_videos = counts.videos
        report.deleted_subcategories = counts.subcategories
        report.deleted_folders = await self._delete_folders(folders)

        logger.info(
            "Category deleted",
            category_id=str(category_id),
            key=category.key,
            deleted_media=report.deleted_media,
            deleted_subcategories=report.deleted_subcategories,
            remote_deleted=len(report.remote_deleted),
            remote_failed=len(report.remote_failed),
            deleted_folders=len(report.deleted_folders),
        )
        tags, paths = media_invalidation(None, touched)
        await self._notify(tags, paths)
        return report

    # ═══════════════════════════════════════════════════════════════════════════
    # ORPHAN SWEEP
    # ═══════════════════════════════════════════════════════════════════════════

    async def sweep_orphans(self) -> OrphanReport:
        """
        Remove local image rows whose remote object no longer exists.

        Only rows under the root folder are compared, against a listing of
        the same prefix. When the listing is truncated nothing is deleted:
        an incomplete listing would flag live images as orphans.

        Never deletes remote objects.
        """
        images = ImageRepository(self.session)
        prefix = f"{settings.CLOUDINARY_ROOT_FOLDER}/"

        local = await images.list_remote_refs(prefix)
        listing = await self.media_store.search(prefix, max_results=settings.ORPHAN_SWEEP_MAX_RESULTS)
        orphans = [ref for ref in local if ref.remote_id not in listing.public_ids]

        if listing.truncated:
            logger.warning(
                "Orphan sweep skipped deletion, remote listing truncated",
                listed=len(listing.public_ids),
                candidates=len(orphans),
            )
            return OrphanReport(orphans=orphans, truncated=True)

        report = OrphanReport(orphans=orphans)
        if orphans:
            report.deleted_count = await images.delete_by_ids(ref.id for ref in orphans)
            await self.session.commit()
            await self._notify_media(MediaType.IMAGE, {ref.category_id for ref in orphans})

        logger.info(
            "Orphan sweep completed",
            local_rows=len(local),
            remote_objects=len(listing.public_ids),
            deleted_count=report.deleted_count,
        )
        return report

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _delete_remote(
        self,
        targets: list[RemoteTarget],
    ) -> tuple[list[UUID], list[RemoteFailure]]:
        """
        Attempt every remote deletion concurrently and wait for all of them.

        Returns:
            (ids deleted remotely, failures with reason)
        """
        deleted: list[UUID] = []
        failed = [RemoteFailure(t.id, REASON_NO_REMOTE_ID) for t in targets if not t.remote_id]
        attempts = [t for t in targets if t.remote_id]

        results = await asyncio.gather(
            *(self.media_store.delete(t.remote_id, t.media_type) for t in attempts),
            return_exceptions=True,
        )
        for target, result in zip(attempts, results):
            if isinstance(result, BaseException):
                logger.warning(
                    "Remote delete failed",
                    media_id=str(target.id),
                    remote_id=target.remote_id,
                    media_type=target.media_type.value,
                    error=str(result),
                )
                failed.append(RemoteFailure(target.id, REASON_REMOTE_DELETE_FAILED))
            else:
                deleted.append(target.id)

        return deleted, failed

    async def _delete_folders(self, paths: list[str]) -> list[str]:
        """
        Delete remote folders; returns the paths actually removed.

        A missing folder is already in the desired state. Other failures
        are logged only.
        """
        results = await asyncio.gather(
            *(self.media_store.delete_folder(path) for path in paths),
            return_exceptions=True,
        )
        deleted: list[str] = []
        for path, result in zip(paths, results):
            if isinstance(result, BaseException):
                logger.warning("Folder delete failed", folder=path, error=str(result))
            elif result:
                deleted.append(path)
            else:
                logger.debug("Folder already absent", folder=path)
        return deleted

    @staticmethod
    def _folder_for(key: str) -> str:
        return f"{settings.CLOUDINARY_ROOT_FOLDER}/{key}"

    async def _notify_media(self, media_type: MediaType, category_ids: set[Optional[UUID]]) -> None:
        touched: list[Optional[Category]] = []
        for category in await self.categories.get_many_with_parents(c for c in category_ids if c):
            touched.extend((category, category.parent))
        tags, paths = media_invalidation(media_type, touched)
        await self._notify(tags, paths)

    async def _notify(self, tags: list[str], paths: list[str]) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.invalidate(tags, paths)
        except Exception:
            logger.warning("Cache notification failed", tags=tags, exc_info=True)

