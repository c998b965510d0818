"""Product reviews: submit, remove, and list.

The handlers load the product, run the review reducer over its current
reviews, and write the result back onto the aggregate in one ``repo.add``.
Concurrent submissions for the same product are serialised by the
repository's version check on the aggregate.
"""

from uuid import uuid4

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.details import load_product
from catalogue.product.product import Product
from catalogue.product.review_aggregation import (
    Review,
    ReviewSubmission,
    list_reviews,
    remove_review,
    upsert_review,
)

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Product")
class SubmitProductReview:
    product_id: Identifier(required=True)
    reviewer_id: Identifier(required=True)
    reviewer_name: String(required=True, max_length=100)
    rating: Float(required=True)
    comment: Text()


@catalogue.command(part_of="Product")
class DeleteProductReview:
    product_id: Identifier(required=True)
    review_id: Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class ProductReviewHandler:
    @handle(SubmitProductReview)
    def submit_review(self, command):
        product = load_product(command.product_id)

        submission = ReviewSubmission(
            review_id=str(uuid4()),
            reviewer_id=str(command.reviewer_id),
            reviewer_name=command.reviewer_name,
            rating=command.rating,
            comment=command.comment or "",
        )
        reviews, summary = upsert_review(product.review_records(), submission)
        stored = next(r for r in reviews if r.reviewer_id == submission.reviewer_id)

        product.apply_reviews(reviews, summary)
        product.record_review(stored, summary)
        current_domain.repository_for(Product).add(product)

        logger.info(
            "Product review saved",
            product_id=str(product.id),
            review_id=stored.review_id,
            number_of_reviews=summary.number_of_reviews,
            average_rating=summary.average_rating,
        )
        return stored.review_id

    @handle(DeleteProductReview)
    def delete_review(self, command):
        product = load_product(command.product_id)

        reviews, summary = remove_review(product.review_records(), str(command.review_id))

        product.apply_reviews(reviews, summary)
        product.record_review_removal(command.review_id, summary)
        current_domain.repository_for(Product).add(product)

        logger.info(
            "Product review removed",
            product_id=str(product.id),
            review_id=str(command.review_id),
            number_of_reviews=summary.number_of_reviews,
        )


def list_product_reviews(product_id) -> tuple[Review, ...]:
    """Reviews of one product in the order they were first submitted."""
    return list_reviews(load_product(product_id).review_records())
