from pydantic import Field

from .base import DocumentSchema


class ProductBase(DocumentSchema):
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    description: str
    image_url: str | None = None


class ProductCreate(ProductBase):
    id: str | None = None
    created_by: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class ProductUpdate(DocumentSchema):
    name: str | None = None
    price: float | None = Field(default=None, ge=0)
    description: str | None = None
    image_url: str | None = None
    updated_at: str | None = None
