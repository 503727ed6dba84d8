import re
import uuid

from portfolio.shared.models import Image
from portfolio.shared.models.enums import UserRole
from portfolio.shared.repositories import UserRepository
from portfolio.shared.utils.security import SecurityUtils


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH & AUTH
# ═══════════════════════════════════════════════════════════════════════════════


async def test_health_and_liveness(client) -> None:
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["X-Request-ID"]

    echoed = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert echoed.headers["X-Request-ID"] == "abc123"

    response = await client.get("/live")
    assert response.json() == {"status": "alive"}


async def test_admin_login_creates_admin_user(client, session_factory) -> None:
    response = await client.post(
        "/auth/login",
        json={"email": "Admin@Portfolio.dev", "password": "correct-horse-battery"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert body["user"]["role"] == "ADMIN"
    assert body["user"]["email"] == "admin@portfolio.dev"

    async with session_factory() as session:
        user = await UserRepository(session).get_by_email("admin@portfolio.dev")
    assert user is not None and user.role == UserRole.ADMIN

    # The issued token opens admin routes
    stats = await client.get(
        "/admin/stats",
        headers={"Authorization": f"Bearer {body['accessToken']}"},
    )
    assert stats.status_code == 200


async def test_login_with_wrong_password_is_401(client) -> None:
    response = await client.post(
        "/auth/login",
        json={"email": "admin@portfolio.dev", "password": "wrong"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid email or password"


async def test_stored_user_login_gets_user_role(client, session_factory) -> None:
    async with session_factory() as session:
        await UserRepository(session).create(
            email="guest@portfolio.dev",
            name="Guest",
            password_hash=SecurityUtils.hash_password("guest-password"),
            role=UserRole.USER,
        )
        await session.commit()

    response = await client.post(
        "/auth/login",
        json={"email": "guest@portfolio.dev", "password": "guest-password"},
    )

    assert response.status_code == 200
    token = response.json()["accessToken"]
    assert response.json()["user"]["role"] == "USER"

    stats = await client.get("/admin/stats", headers={"Authorization": f"Bearer {token}"})
    assert stats.status_code == 401


# ═══════════════════════════════════════════════════════════════════════════════
# CATEGORIES
# ═══════════════════════════════════════════════════════════════════════════════


async def test_create_category_derives_unique_keys(client, admin_headers, cache) -> None:
    first = await client.post("/categories", json={"name": "Summer Wedding!!"}, headers=admin_headers)
    second = await client.post("/categories", json={"name": "Summer Wedding"}, headers=admin_headers)

    assert first.status_code == 201
    assert first.json()["key"] == "summer-wedding"
    assert second.json()["key"] == "summer-wedding-1"
    assert "categories" in cache.tags


async def test_create_category_with_taken_key_is_409(client, seed, admin_headers) -> None:
    await seed.category("portraits")

    response = await client.post(
        "/categories",
        json={"name": "Portraits again", "key": "portraits"},
        headers=admin_headers,
    )

    assert response.status_code == 409


async def test_category_list_hides_private_entries_from_visitors(client, seed, admin_headers) -> None:
    weddings = await seed.category("weddings")
    await seed.category("smith-wedding", parent=weddings)
    await seed.category("secret-wedding", parent=weddings, is_private=True)
    await seed.category("drafts", is_private=True)

    public = await client.get("/categories")
    admin = await client.get("/categories", headers=admin_headers)

    public_keys = {c["key"]: [s["key"] for s in c["subcategories"]] for c in public.json()["categories"]}
    admin_keys = {c["key"]: sorted(s["key"] for s in c["subcategories"]) for c in admin.json()["categories"]}
    assert public_keys == {"weddings": ["smith-wedding"]}
    assert admin_keys == {"drafts": [], "weddings": ["secret-wedding", "smith-wedding"]}


async def test_update_category(client, seed, admin_headers, cache) -> None:
    category = await seed.category("weddings")

    response = await client.patch(
        f"/categories/{category.id}",
        json={"key": "wedding-stories", "isPrivate": True, "socialLinks": {"instagram": "https://ig", "tiktok": ""}},
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["key"] == "wedding-stories"
    assert body["isPrivate"] is True
    assert body["socialLinks"] == {"instagram": "https://ig"}
    assert {"gallery-weddings", "gallery-wedding-stories"} <= cache.tags


async def test_get_category_requires_admin(client, seed, admin_headers) -> None:
    category = await seed.category("weddings")

    assert (await client.get(f"/categories/{category.id}")).status_code == 401
    response = await client.get(f"/categories/{category.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["id"] == str(category.id)


# ═══════════════════════════════════════════════════════════════════════════════
# MEDIA
# ═══════════════════════════════════════════════════════════════════════════════


async def test_register_media_appends_to_category(client, seed, admin_headers) -> None:
    category = await seed.category("weddings")
    await seed.image(category, order=4)

    response = await client.post(
        "/media",
        json={
            "type": "image",
            "categoryId": str(category.id),
            "cloudinaryId": "portfolio/weddings/first-dance",
            "url": "https://res.example.com/first-dance.jpg",
            "title": "First dance",
            "width": 4000,
            "height": 2667,
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["type"] == "image"
    assert body["order"] == 5
    assert body["cloudinaryId"] == "portfolio/weddings/first-dance"
    assert await seed.count(Image) == 2


async def test_register_media_unknown_category_is_404(client, admin_headers) -> None:
    response = await client.post(
        "/media",
        json={"type": "video", "categoryId": str(uuid.uuid4()), "cloudinaryId": "x", "url": "https://x"},
        headers=admin_headers,
    )

    assert response.status_code == 404


async def test_upload_image_goes_to_category_folder(client, seed, media_store, admin_headers) -> None:
    category = await seed.category("weddings")

    response = await client.post(
        "/media/upload",
        data={"categoryId": str(category.id), "title": "First Dance"},
        files={"file": ("dance.jpg", b"\xff\xd8\xff\xe0jpeg-bytes", "image/jpeg")},
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["type"] == "image"
    assert body["order"] == 1
    assert body["cloudinaryId"].startswith("portfolio/weddings/")
    upload = media_store.uploads[0]
    assert upload["folder"] == "portfolio/weddings"
    assert re.fullmatch(r"\d+_first-dance", upload["public_id"])


async def test_upload_video_is_inferred_from_content_type(client, seed, admin_headers) -> None:
    category = await seed.category("films")

    response = await client.post(
        "/media/upload",
        data={"categoryId": str(category.id)},
        files={"file": ("clip.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")},
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["type"] == "video"
    assert body["duration"] == 12.5
    assert body["thumbnailUrl"].endswith(".jpg")


async def test_update_image_moves_between_categories(client, seed, admin_headers, cache) -> None:
    weddings = await seed.category("weddings")
    portraits = await seed.category("portraits")
    await seed.image(portraits, order=7)
    image = await seed.image(weddings)

    response = await client.patch(
        f"/images/{image.id}",
        json={"title": "Moved", "categoryId": str(portraits.id)},
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Moved"
    assert body["categoryId"] == str(portraits.id)
    assert body["order"] == 8
    assert {"gallery-weddings", "gallery-portraits"} <= cache.tags


# ═══════════════════════════════════════════════════════════════════════════════
# GALLERY & STATS
# ═══════════════════════════════════════════════════════════════════════════════


async def test_gallery_merges_visible_subcategory_media_and_caches(client, seed, cache) -> None:
    weddings = await seed.category("weddings")
    public_sub = await seed.category("smith-wedding", parent=weddings)
    private_sub = await seed.category("secret-wedding", parent=weddings, is_private=True)
    await seed.image(weddings, order=2, title="Own")
    await seed.image(public_sub, order=1, title="Nested")
    await seed.video(weddings, order=3, title="Film")
    await seed.image(private_sub, order=0, title="Hidden")

    response = await client.get("/gallery/weddings")

    assert response.status_code == 200
    body = response.json()
    assert body["category"]["key"] == "weddings"
    assert [s["key"] for s in body["subcategories"]] == ["smith-wedding"]
    assert [m["title"] for m in body["media"]] == ["Nested", "Own", "Film"]
    assert [m["type"] for m in body["media"]] == ["image", "image", "video"]
    assert cache.pages["/gallery/weddings"] == body


async def test_private_gallery_is_404_for_visitors(client, seed, admin_headers, cache) -> None:
    await seed.category("drafts", is_private=True)

    assert (await client.get("/gallery/drafts")).status_code == 404
    response = await client.get("/gallery/drafts", headers=admin_headers)
    assert response.status_code == 200
    assert "/gallery/drafts" not in cache.pages


async def test_stats(client, seed, admin_headers) -> None:
    weddings = await seed.category("weddings")
    await seed.category("smith-wedding", parent=weddings, is_private=True)
    await seed.image(weddings)
    await seed.video(weddings)

    response = await client.get("/admin/stats", headers=admin_headers)

    assert response.json() == {
        "images": 1,
        "videos": 1,
        "categories": 2,
        "subcategories": 1,
        "privateCategories": 1,
    }
