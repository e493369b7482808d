import json

import pytest
from pydantic import ValidationError

from refix.db.repositories import categories as repo_categories


def _catalog():
    return [
        {
            "id": "phones",
            "name": "Phones",
            "icon": "📱",
            "path": "/device/phones",
            "displayOrder": 1,
            "isPublic": True,
            "publicMetadata": {"featured": True},
            "subcategories": [
                {
                    "id": "apple",
                    "name": "Apple",
                    "models": ["iPhone 12", {"name": "iPhone 13", "parts": ["Screen", "Battery"]}],
                }
            ],
        },
        {"id": "consoles", "name": "Consoles", "subcategories": []},
    ]


@pytest.mark.asyncio
async def test_set_then_get_returns_same_list(backend):
    stored = await repo_categories.set_categories(backend, _catalog())

    assert stored == _catalog()
    assert await repo_categories.get_categories(backend) == _catalog()


@pytest.mark.asyncio
async def test_set_replaces_whole_collection(backend):
    await repo_categories.set_categories(backend, _catalog())
    await repo_categories.set_categories(backend, [{"id": "tablets", "name": "Tablets"}])

    assert await repo_categories.get_categories(backend) == [{"id": "tablets", "name": "Tablets"}]

    await repo_categories.set_categories(backend, [])
    assert await repo_categories.get_categories(backend) == []


@pytest.mark.asyncio
async def test_set_rejects_invalid_category(backend):
    await repo_categories.set_categories(backend, _catalog())

    with pytest.raises(ValidationError):
        await repo_categories.set_categories(backend, [{"id": "nameless"}])

    assert await repo_categories.get_categories(backend) == _catalog()


@pytest.mark.asyncio
async def test_public_categories_exclude_private_ones(backend):
    await repo_categories.set_categories(
        backend,
        [
            {"id": "c1", "name": "Phones", "isPublic": True, "displayOrder": 2},
            {"id": "c2", "name": "Laptops", "isPublic": False, "displayOrder": 1},
        ],
    )

    public = await repo_categories.get_public_categories(backend)

    assert [c["id"] for c in public] == ["c1"]
    assert public[0]["name"] == "Phones"
    assert public[0]["displayOrder"] == 2


@pytest.mark.asyncio
async def test_public_categories_sort_by_order_then_name(backend):
    await repo_categories.set_categories(
        backend,
        [
            {"id": "z", "name": "Zebra", "displayOrder": 1},
            {"id": "b", "name": "Beta", "displayOrder": 2},
            {"id": "a", "name": "Alpha", "displayOrder": 1},
            {"id": "n", "name": "Unflagged"},
        ],
    )

    public = await repo_categories.get_public_categories(backend)

    # missing isPublic counts as public; missing displayOrder falls back to position
    assert [c["id"] for c in public] == ["a", "z", "b", "n"]
    assert public[-1]["displayOrder"] == 4


@pytest.mark.asyncio
async def test_public_view_fills_defaults(backend):
    await repo_categories.set_categories(backend, [{"name": "Smart Watches"}])

    (view,) = await repo_categories.get_public_categories(backend)

    assert view == {
        "id": "cat-derived-0",
        "name": "Smart Watches",
        "icon": repo_categories.DEFAULT_ICON,
        "path": "/device/smart-watches",
        "displayOrder": 1,
        "parentId": None,
        "imageUrl": None,
        "createdAt": None,
        "updatedAt": None,
    }


@pytest.mark.asyncio
async def test_public_view_is_empty_for_empty_catalog(backend):
    assert await repo_categories.get_public_categories(backend) == []


@pytest.mark.asyncio
async def test_legacy_public_category_crud(backend):
    created = await repo_categories.create_public_category(
        backend, {"name": "Game Consoles", "displayOrder": 3}
    )
    assert created["id"] == "game-consoles"

    await repo_categories.create_public_category(
        backend, {"id": "handhelds", "name": "Handhelds", "parentId": "game-consoles", "displayOrder": 2}
    )
    await repo_categories.create_public_category(
        backend, {"id": "home", "name": "Home", "parentId": "game-consoles", "displayOrder": 1}
    )

    assert await repo_categories.get_public_category_by_id(backend, "game-consoles") == created
    children = await repo_categories.get_public_subcategories(backend, "game-consoles")
    assert [c["id"] for c in children] == ["home", "handhelds"]

    updated = await repo_categories.update_public_category(backend, "home", {"icon": "🏠"})
    assert updated["icon"] == "🏠"
    assert updated["name"] == "Home"
    assert await repo_categories.update_public_category(backend, "missing", {"icon": "x"}) is None

    await repo_categories.delete_public_category(backend, "handhelds")
    assert await repo_categories.get_public_category_by_id(backend, "handhelds") is None
    # the unified collection is not involved
    assert await repo_categories.get_categories(backend) == []


@pytest.mark.asyncio
async def test_legacy_create_is_an_upsert(backend):
    await repo_categories.create_public_category(backend, {"id": "phones", "name": "Phones"})
    await repo_categories.create_public_category(backend, {"id": "phones", "name": "Mobile Phones"})

    legacy = await repo_categories.list_legacy_public_categories(backend)
    assert legacy == [{"id": "phones", "name": "Mobile Phones"}]


@pytest.mark.asyncio
async def test_json_file_gains_legacy_key_only_when_written(json_backend):
    await repo_categories.set_categories(json_backend, _catalog())
    assert "publicCategories" not in json.loads(json_backend.path.read_text(encoding="utf-8"))

    await repo_categories.create_public_category(json_backend, {"id": "phones", "name": "Phones"})
    data = json.loads(json_backend.path.read_text(encoding="utf-8"))
    assert data["publicCategories"] == [{"id": "phones", "name": "Phones"}]
    assert data["categories"] == _catalog()


@pytest.mark.asyncio
async def test_mixed_string_and_number_orders_are_stored_as_numbers(backend):
    await repo_categories.set_categories(
        backend,
        [
            {"id": "a", "name": "A", "displayOrder": "2"},
            {"id": "b", "name": "B", "displayOrder": 1},
            {"id": "c", "name": "C", "subcategories": [{"name": "Apple", "displayOrder": "3"}]},
        ],
    )

    stored = await repo_categories.get_categories(backend)
    assert stored[0]["displayOrder"] == 2
    assert stored[2]["subcategories"] == [{"name": "Apple", "displayOrder": 3}]
    assert [c["id"] for c in await repo_categories.get_public_categories(backend)] == ["b", "a", "c"]


@pytest.mark.asyncio
async def test_set_rejects_non_numeric_order(backend):
    with pytest.raises(ValidationError):
        await repo_categories.set_categories(backend, [{"id": "a", "name": "A", "displayOrder": "first"}])
    assert await repo_categories.get_categories(backend) == []


@pytest.mark.asyncio
async def test_public_view_tolerates_raw_stored_orders(backend):
    # written around the repository, as an older deployment or a hand edit would
    await backend.replace_categories(
        [
            {"id": "junk", "name": "Junk", "displayOrder": "soon"},
            {"id": "a", "name": "A", "displayOrder": "2"},
            {"id": "b", "name": "B", "displayOrder": 1},
        ]
    )

    public = await repo_categories.get_public_categories(backend)

    assert [(c["id"], c["displayOrder"]) for c in public] == [("b", 1), ("a", 2), ("junk", "soon")]


@pytest.mark.asyncio
async def test_legacy_subcategories_sort_with_mixed_orders(backend):
    await backend.upsert("publicCategories", {"id": "x", "name": "X", "parentId": "p", "displayOrder": "2"})
    await backend.upsert("publicCategories", {"id": "y", "name": "Y", "parentId": "p", "displayOrder": 1})
    await backend.upsert("publicCategories", {"id": "z", "name": "Z", "parentId": "p"})

    children = await repo_categories.get_public_subcategories(backend, "p")

    assert [c["id"] for c in children] == ["z", "y", "x"]
