from __future__ import annotations

import os
import uuid
from typing import Any, Optional

# Settings are read on import; point them at an in-memory database and fixed
# credentials before anything from portfolio is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_EMAIL", "admin@portfolio.dev")
os.environ.setdefault("ADMIN_PASSWORD", "correct-horse-battery")
os.environ.setdefault("APP_ENV", "test")

import httpx
import pytest
from sqlalchemy import func, select
from sqlalchemy.pool import StaticPool

from portfolio.api.dependencies.database import get_db
from portfolio.api.dependencies.services import get_cache, get_media_store
from portfolio.api.main import create_application
from portfolio.config.settings import settings
from portfolio.shared.adapters.cloudinary_adapter import SearchResult, UploadResult
from portfolio.shared.core.exceptions import MediaStoreError
from portfolio.shared.db.session import build_engine, build_session_factory
from portfolio.shared.models import Base, Category, Image, MediaType, Video
from portfolio.shared.repositories import CategoryRepository, ImageRepository, VideoRepository
from portfolio.shared.utils.security import SecurityUtils


class FakeMediaStore:
    """In-memory MediaStore recording every call."""

    def __init__(self) -> None:
        self.remote_ids: set[str] = set()
        self.failing: set[str] = set()
        self.missing_folders: set[str] = set()
        self.failing_folders: set[str] = set()
        self.truncated = False
        self.delete_attempts: list[str] = []
        self.folder_attempts: list[str] = []
        self.search_calls: list[tuple[str, int]] = []
        self.uploads: list[dict[str, Any]] = []

    async def upload(
        self,
        data: bytes,
        *,
        folder: str,
        resource_type: Any = MediaType.IMAGE,
        public_id: Optional[str] = None,
    ) -> UploadResult:
        resource_type = MediaType(resource_type)
        remote_id = f"{folder}/{public_id or f'upload-{len(self.uploads)}'}"
        self.uploads.append(
            {"folder": folder, "resource_type": resource_type, "public_id": public_id, "size": len(data)}
        )
        self.remote_ids.add(remote_id)
        is_video = resource_type == MediaType.VIDEO
        return UploadResult(
            public_id=remote_id,
            url=f"https://res.example.com/{remote_id}",
            resource_type=resource_type.value,
            width=1600,
            height=900,
            format="mp4" if is_video else "jpg",
            bytes=len(data),
            duration=12.5 if is_video else None,
            thumbnail_url=f"https://res.example.com/{remote_id}.jpg" if is_video else None,
        )

    async def delete(self, public_id: str, resource_type: Any = MediaType.IMAGE) -> None:
        self.delete_attempts.append(public_id)
        if public_id in self.failing:
            raise MediaStoreError("Cloudinary delete failed", remote_id=public_id)
        self.remote_ids.discard(public_id)

    async def delete_folder(self, path: str) -> bool:
        self.folder_attempts.append(path)
        if path in self.failing_folders:
            raise MediaStoreError(f"Cloudinary delete_folder failed for {path}")
        return path not in self.missing_folders

    async def search(self, prefix: str, max_results: int = 500) -> SearchResult:
        self.search_calls.append((prefix, max_results))
        return SearchResult(
            public_ids={r for r in self.remote_ids if r.startswith(prefix)},
            truncated=self.truncated,
        )


class FakeCache:
    """Records invalidations; get/set backed by a dict."""

    def __init__(self) -> None:
        self.invalidations: list[tuple[list[str], list[str]]] = []
        self.pages: dict[str, Any] = {}

    async def invalidate(self, tags, paths=()) -> None:
        self.invalidations.append((list(tags), list(paths)))

    async def get(self, path: str) -> Any:
        return self.pages.get(path)

    async def set(self, path: str, value: Any, tags) -> None:
        self.pages[path] = value

    @property
    def tags(self) -> set[str]:
        return {tag for tags, _ in self.invalidations for tag in tags}

    @property
    def paths(self) -> set[str]:
        return {path for _, paths in self.invalidations for path in paths}


class SessionAwareCache(FakeCache):
    """FakeCache that notes whether ``session`` had an open transaction at each invalidation."""

    def __init__(self, session) -> None:
        super().__init__()
        self.session = session
        self.open_transaction: list[bool] = []

    async def invalidate(self, tags, paths=()) -> None:
        self.open_transaction.append(self.session.in_transaction())
        await super().invalidate(tags, paths)


class Seeder:
    """Creates committed rows through the repositories, one session per call."""

    def __init__(self, session_factory, media_store: FakeMediaStore) -> None:
        self.session_factory = session_factory
        self.media_store = media_store

    async def category(
        self,
        key: str,
        *,
        parent: Optional[Category] = None,
        is_private: bool = False,
        name: Optional[str] = None,
    ) -> Category:
        async with self.session_factory() as session:
            category = await CategoryRepository(session).create(
                key=key,
                name=name or key.replace("-", " ").title(),
                is_private=is_private,
                parent_id=parent.id if parent else None,
            )
            await session.commit()
            return category

    async def image(self, category: Category, *, remote_id: Any = ..., order: int = 0, title: str = "Frame") -> Image:
        return await self._media(ImageRepository, category, remote_id, order, title)

    async def video(self, category: Category, *, remote_id: Any = ..., order: int = 0, title: str = "Clip") -> Video:
        return await self._media(VideoRepository, category, remote_id, order, title)

    async def _media(self, repo_class, category, remote_id, order, title):
        if remote_id is ...:
            remote_id = f"{settings.CLOUDINARY_ROOT_FOLDER}/{category.key}/{uuid.uuid4().hex[:12]}"
        async with self.session_factory() as session:
            row = await repo_class(session).create(
                title=title,
                cloudinary_id=remote_id,
                url=f"https://res.example.com/{remote_id}",
                order=order,
                category_id=category.id,
            )
            await session.commit()
        if remote_id:
            self.media_store.remote_ids.add(remote_id)
        return row

    async def count(self, model) -> int:
        async with self.session_factory() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar() or 0

    async def exists(self, model, row_id: uuid.UUID) -> bool:
        async with self.session_factory() as session:
            return await session.get(model, row_id) is not None


# ═══════════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
async def engine():
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def media_store() -> FakeMediaStore:
    return FakeMediaStore()


@pytest.fixture
def cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def session_cache(session) -> SessionAwareCache:
    return SessionAwareCache(session)


@pytest.fixture
def seed(session_factory, media_store) -> Seeder:
    return Seeder(session_factory, media_store)


@pytest.fixture
async def client(session_factory, media_store, cache):
    app = create_application()

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_store] = lambda: media_store
    app.dependency_overrides[get_cache] = lambda: cache

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def _bearer(role: str) -> dict[str, str]:
    token = SecurityUtils.create_access_token(
        data={"user_id": str(uuid.uuid4()), "email": f"{role.lower()}@portfolio.dev", "role": role},
        secret_key=settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return _bearer("ADMIN")


@pytest.fixture
def user_headers() -> dict[str, str]:
    return _bearer("USER")
