import uuid

import pytest

from portfolio.shared.core.exceptions import (
    CategoryNotFoundError,
    DuplicateResourceError,
    ValidationError,
)
from portfolio.shared.schemas.category import CategoryCreate, CategoryUpdate
from portfolio.shared.services.category_service import CategoryService


@pytest.fixture
def service(session, cache) -> CategoryService:
    return CategoryService(session, cache)


async def test_create_derives_key_and_drops_empty_links(service) -> None:
    category = await service.create_category(
        CategoryCreate(
            name="Summer Wedding!!",
            social_links={"instagram": "https://instagram.com/studio", "facebook": "  "},
        )
    )

    assert category.key == "summer-wedding"
    assert category.social_links == {"instagram": "https://instagram.com/studio"}
    assert category.subcategories == []


async def test_create_resolves_key_collisions(service) -> None:
    await service.create_category(CategoryCreate(name="Portraits"))
    second = await service.create_category(CategoryCreate(name="Portraits"))
    third = await service.create_category(CategoryCreate(name="portraits!"))

    assert second.key == "portraits-1"
    assert third.key == "portraits-2"


async def test_create_with_taken_explicit_key_conflicts(service) -> None:
    await service.create_category(CategoryCreate(name="Portraits"))

    with pytest.raises(DuplicateResourceError):
        await service.create_category(CategoryCreate(name="Other", key="portraits"))


async def test_subcategories_cannot_nest(service) -> None:
    top = await service.create_category(CategoryCreate(name="Weddings"))
    child = await service.create_category(CategoryCreate(name="Smith", parent_id=top.id))

    assert child.parent.key == "weddings"
    with pytest.raises(ValidationError):
        await service.create_category(CategoryCreate(name="Deeper", parent_id=child.id))


async def test_create_with_unknown_parent_is_not_found(service) -> None:
    with pytest.raises(CategoryNotFoundError):
        await service.create_category(CategoryCreate(name="Orphan", parent_id=uuid.uuid4()))


async def test_category_with_children_cannot_become_a_subcategory(service) -> None:
    weddings = await service.create_category(CategoryCreate(name="Weddings"))
    await service.create_category(CategoryCreate(name="Smith", parent_id=weddings.id))
    portraits = await service.create_category(CategoryCreate(name="Portraits"))

    with pytest.raises(ValidationError):
        await service.update_category(
            weddings.id,
            CategoryUpdate.model_validate({"parentId": str(portraits.id)}),
        )


async def test_update_applies_only_sent_fields(service, cache) -> None:
    category = await service.create_category(
        CategoryCreate(name="Weddings", description="Ceremonies and receptions")
    )

    updated = await service.update_category(
        category.id,
        CategoryUpdate.model_validate({"name": "Wedding Stories", "key": "wedding-stories"}),
    )

    assert updated.name == "Wedding Stories"
    assert updated.key == "wedding-stories"
    assert updated.description == "Ceremonies and receptions"
    assert {"gallery-weddings", "gallery-wedding-stories"} <= cache.tags


async def test_update_key_conflict(service) -> None:
    await service.create_category(CategoryCreate(name="Weddings"))
    portraits = await service.create_category(CategoryCreate(name="Portraits"))

    with pytest.raises(DuplicateResourceError):
        await service.update_category(portraits.id, CategoryUpdate(key="weddings"))


async def test_promote_subcategory_to_top_level(service) -> None:
    weddings = await service.create_category(CategoryCreate(name="Weddings"))
    child = await service.create_category(CategoryCreate(name="Smith", parent_id=weddings.id))

    promoted = await service.update_category(child.id, CategoryUpdate.model_validate({"parentId": None}))

    assert promoted.parent_id is None
    assert promoted.parent is None


async def test_cache_is_invalidated_after_commit(session, session_cache) -> None:
    service = CategoryService(session, session_cache)

    category = await service.create_category(CategoryCreate(name="Weddings"))
    await service.update_category(category.id, CategoryUpdate(description="Ceremonies"))

    assert session_cache.open_transaction == [False, False]
