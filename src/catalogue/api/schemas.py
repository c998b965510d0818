"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Trail Running Shoe",
                    "description": "Lightweight shoe with a grippy outsole.",
                    "price": 129.0,
                    "category": "Footwear",
                    "stock": 25,
                    "images": ["https://example.com/uploads/trail-shoe.jpg"],
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str
    price: float = Field(..., ge=0)
    category: str = Field(..., max_length=100)
    stock: int | None = Field(None, ge=0, le=9999)
    images: list[str] = Field(default_factory=list)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    category: str | None = Field(None, max_length=100)
    stock: int | None = Field(None, ge=0, le=9999)


class SubmitReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"product_id": "prod-001", "rating": 4, "comment": "Fits well."}]}
    }

    product_id: str
    rating: float
    comment: str = ""


# --- Response Schemas ---


class ProductIdResponse(BaseModel):
    product_id: str


class ReviewIdResponse(BaseModel):
    review_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ImageResponse(BaseModel):
    public_id: str
    url: str


class ReviewResponse(BaseModel):
    review_id: str
    reviewer_id: str
    reviewer_name: str
    rating: float
    comment: str = ""


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    category: str
    stock: int | None = None
    seller_id: str
    images: list[ImageResponse] = Field(default_factory=list)
    number_of_reviews: int = 0
    average_rating: float = 0.0
    created_at: datetime | None = None


class ProductDetailResponse(ProductResponse):
    reviews: list[ReviewResponse] = Field(default_factory=list)


class ProductListResponse(BaseModel):
    """One page of products.

    ``products_count`` covers the whole collection being browsed;
    ``filtered_products_count`` covers only what matched the query.
    """

    products: list[ProductResponse]
    products_count: int
    filtered_products_count: int
    result_per_page: int | None = None
    page: int = 1
    total_pages: int = 0


class ProductReviewsResponse(BaseModel):
    product_id: str
    number_of_reviews: int
    average_rating: float
    reviews: list[ReviewResponse]
