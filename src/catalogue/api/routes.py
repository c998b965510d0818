"""FastAPI endpoints for the Catalogue domain."""

import json

from fastapi import APIRouter, Depends, Request
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    CreateProductRequest,
    ImageResponse,
    ProductDetailResponse,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    ProductReviewsResponse,
    ReviewIdResponse,
    ReviewResponse,
    StatusResponse,
    SubmitReviewRequest,
    UpdateProductRequest,
)
from catalogue.product.browsing import get_product, list_all_products, list_products, list_vendor_products
from catalogue.product.creation import CreateProduct
from catalogue.product.details import UpdateProduct
from catalogue.product.removal import DeleteProduct
from catalogue.product.review_aggregation import summarize
from catalogue.product.reviewing import DeleteProductReview, SubmitProductReview, list_product_reviews
from shared.auth import AuthenticatedUser, current_user, require_roles

product_router = APIRouter(prefix="/products", tags=["products"])
admin_product_router = APIRouter(prefix="/admin/products", tags=["products"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])

_sellers = require_roles("admin", "vendor")


def _product_response(product, response_cls=ProductResponse):
    data = dict(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        category=product.category,
        stock=product.stock,
        seller_id=str(product.seller_id),
        images=[ImageResponse(public_id=i.public_id, url=i.url) for i in product.images],
        number_of_reviews=product.number_of_reviews,
        average_rating=product.average_rating,
        created_at=product.created_at,
    )
    if response_cls is ProductDetailResponse:
        data["reviews"] = [_review_response(r) for r in product.review_records()]
    return response_cls(**data)


def _review_response(review) -> ReviewResponse:
    return ReviewResponse(
        review_id=review.review_id,
        reviewer_id=review.reviewer_id,
        reviewer_name=review.reviewer_name,
        rating=review.rating,
        comment=review.comment,
    )


def _list_response(page) -> ProductListResponse:
    return ProductListResponse(
        products=[_product_response(p) for p in page.items],
        products_count=page.count,
        filtered_products_count=page.matched,
        result_per_page=page.page_size,
        page=page.page_number,
        total_pages=page.total_pages,
    )


# --- Public browsing ---


@product_router.get("", response_model=ProductListResponse)
async def browse_products(request: Request) -> ProductListResponse:
    """Keyword search, filters such as ``price[gte]=10``, and ``page``/``limit`` paging."""
    return _list_response(list_products(dict(request.query_params)))


@product_router.get("/vendor/{vendor_id}", response_model=ProductListResponse)
async def browse_vendor_products(vendor_id: str, request: Request) -> ProductListResponse:
    return _list_response(list_vendor_products(vendor_id, dict(request.query_params)))


@product_router.get("/{product_id}", response_model=ProductDetailResponse)
async def product_detail(product_id: str) -> ProductDetailResponse:
    return _product_response(get_product(product_id), ProductDetailResponse)


# --- Seller and admin management ---


@admin_product_router.get("", response_model=list[ProductResponse], dependencies=[Depends(require_roles("admin"))])
async def all_products() -> list[ProductResponse]:
    return [_product_response(p) for p in list_all_products()]


@admin_product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest, user: AuthenticatedUser = Depends(_sellers)) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        stock=body.stock,
        seller_id=user.id,
        images=json.dumps(body.images),
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@admin_product_router.put("/{product_id}", response_model=StatusResponse, dependencies=[Depends(_sellers)])
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        stock=body.stock,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_product_router.delete("/{product_id}", response_model=StatusResponse, dependencies=[Depends(_sellers)])
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# --- Reviews ---


@review_router.put("", response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest, user: AuthenticatedUser = Depends(current_user)) -> ReviewIdResponse:
    command = SubmitProductReview(
        product_id=body.product_id,
        reviewer_id=user.id,
        reviewer_name=user.name,
        rating=body.rating,
        comment=body.comment,
    )
    result = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=result)


@review_router.get("", response_model=ProductReviewsResponse)
async def product_reviews(product_id: str) -> ProductReviewsResponse:
    reviews = list_product_reviews(product_id)
    summary = summarize(reviews)
    return ProductReviewsResponse(
        product_id=product_id,
        number_of_reviews=summary.number_of_reviews,
        average_rating=summary.average_rating,
        reviews=[_review_response(r) for r in reviews],
    )


@review_router.delete("", response_model=StatusResponse, dependencies=[Depends(require_roles("admin"))])
async def delete_review(product_id: str, review_id: str) -> StatusResponse:
    current_domain.process(DeleteProductReview(product_id=product_id, review_id=review_id), asynchronous=False)
    return StatusResponse()
