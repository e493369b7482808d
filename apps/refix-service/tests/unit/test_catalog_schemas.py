import logging

import pytest
from pydantic import ValidationError

from refix.db import schemas
from refix.utils.collections import UserRoleEnum


def _phones():
    return {
        "id": "phones",
        "name": "Phones",
        "displayOrder": 1,
        "publicMetadata": {"featured": True},
        "subcategories": [
            {
                "name": "Apple",
                "displayOrder": 2,
                "models": [
                    "iPhone 12",
                    {"name": "iPhone 13", "imageUrl": "/img/13.png", "parts": ["Screen", "Battery"]},
                ],
            }
        ],
    }


def test_category_round_trips_to_identical_document():
    category = schemas.Category.model_validate(_phones())
    assert category.to_document() == _phones()


def test_bare_model_name_is_normalized_but_written_back_as_string():
    category = schemas.Category.model_validate(_phones())
    bare, detailed = category.subcategories[0].models
    assert bare.name == "iPhone 12"
    assert bare.kind == "name"
    assert bare.parts == []
    assert bare.to_document() == "iPhone 12"
    assert detailed.kind == "detailed"
    assert detailed.parts == ["Screen", "Battery"]


def test_bare_model_with_parts_is_promoted():
    model = schemas.CatalogModel.model_validate("Pixel 7")
    model.parts = ["Screen"]
    assert model.to_document() == {"name": "Pixel 7", "parts": ["Screen"]}


def test_parts_outside_models_are_dropped(caplog):
    legacy = {
        "name": "Laptops",
        "parts": ["Keyboard"],
        "subcategories": [{"name": "Dell", "parts": ["Hinge"], "models": ["XPS 13"]}],
    }
    with caplog.at_level(logging.WARNING):
        category = schemas.Category.model_validate(legacy)

    assert category.to_document() == {
        "name": "Laptops",
        "subcategories": [{"name": "Dell", "models": ["XPS 13"]}],
    }
    assert "parts belong to models" in caplog.text


def test_snake_case_construction_dumps_camel_case():
    category = schemas.Category(name="Tablets", display_order=3, is_public=False)
    assert category.to_document() == {"name": "Tablets", "displayOrder": 3, "isPublic": False}


def test_category_requires_a_name():
    with pytest.raises(ValidationError):
        schemas.Category.model_validate({"id": "nameless"})


def test_user_create_rejects_empty_username():
    with pytest.raises(ValidationError):
        schemas.UserCreate.model_validate({"username": "", "email": "a@example.com"})


def test_user_role_defaults_to_creator():
    user = schemas.UserCreate.model_validate({"username": "sam", "email": "sam@example.com"})
    assert user.role == UserRoleEnum.creator


def test_new_record_id_uses_prefix():
    first, second = schemas.new_record_id("tutorial"), schemas.new_record_id("tutorial")
    assert first.startswith("tutorial-")
    assert first != second


@pytest.mark.parametrize("model", [schemas.Category, schemas.Subcategory, schemas.PublicCategory])
def test_numeric_string_display_order_becomes_a_number(model):
    assert model.model_validate({"name": "X", "displayOrder": "2"}).display_order == 2
    assert model.model_validate({"name": "X", "displayOrder": " 2.5 "}).display_order == 2.5
    assert model.model_validate({"name": "X", "displayOrder": 3}).to_document()["displayOrder"] == 3


@pytest.mark.parametrize("model", [schemas.Category, schemas.Subcategory])
@pytest.mark.parametrize("value", ["first", True, [1]])
def test_non_numeric_display_order_is_rejected(model, value):
    with pytest.raises(ValidationError):
        model.model_validate({"name": "X", "displayOrder": value})


def test_display_order_key_sorts_unparseable_last():
    values = ["2", 1, None, "junk", 1.5]
    assert sorted(values, key=schemas.display_order_key) == [1, 1.5, "2", None, "junk"]
    assert schemas.display_order_key(None, missing=0) == 0
