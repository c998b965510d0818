"""Product aggregate root with Image and ProductReview entities."""

import math
from datetime import datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from catalogue.domain import catalogue
from catalogue.product.review_aggregation import RatingSummary, Review


@catalogue.entity(part_of="Product")
class Image:
    """Product image held in the external image store."""

    public_id: String(required=True, max_length=255)
    url: String(required=True, max_length=500)


@catalogue.entity(part_of="Product")
class ProductReview:
    """One reviewer's rating and comment. At most one per reviewer."""

    reviewer_id: Identifier(required=True)
    reviewer_name: String(required=True, max_length=100)
    rating: Float(required=True, min_value=1.0, max_value=5.0)
    comment: Text()
    created_at: DateTime(default=datetime.now)


@catalogue.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=255)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0, max_value=99999999.0)
    category: String(required=True, max_length=100)
    stock: Integer(min_value=0, max_value=9999, default=1)
    seller_id: Identifier(required=True)
    images: HasMany(Image)
    reviews: HasMany(ProductReview)
    number_of_reviews: Integer(default=0)
    average_rating: Float(default=0.0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def review_count_matches_reviews(self):
        if self.number_of_reviews != len(self.reviews):
            raise ValidationError({"number_of_reviews": ["Review count must equal the number of reviews"]})

    @invariant.post
    def average_rating_matches_reviews(self):
        if not self.reviews:
            expected = 0.0
        else:
            expected = sum(r.rating for r in self.reviews) / len(self.reviews)
        if not math.isclose(self.average_rating or 0.0, expected, abs_tol=1e-9):
            raise ValidationError({"average_rating": ["Average rating must be the mean of review ratings"]})

    @classmethod
    def create(cls, name, description, price, category, seller_id, stock=None, images=None):
        from catalogue.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name,
            description=description,
            price=price,
            category=category,
            stock=stock if stock is not None else 1,
            seller_id=seller_id,
            created_at=now,
            updated_at=now,
        )
        for image in images or []:
            product.add_images(Image(public_id=image["public_id"], url=image["url"]))

        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                category=category,
                price=price,
                seller_id=seller_id,
                created_at=now,
            )
        )
        return product

    def update_details(self, name=None, description=None, price=None, category=None, stock=None):
        from catalogue.product.events import ProductUpdated

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if category is not None:
            self.category = category
        if stock is not None:
            self.stock = stock

        self.updated_at = datetime.now()

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                category=self.category,
                stock=self.stock,
            )
        )

    def review_records(self) -> tuple[Review, ...]:
        """Reviews as plain records, oldest first."""
        ordered = sorted(self.reviews, key=lambda r: r.created_at or datetime.min)
        return tuple(
            Review(
                review_id=str(r.id),
                reviewer_id=str(r.reviewer_id),
                reviewer_name=r.reviewer_name,
                rating=r.rating,
                comment=r.comment or "",
            )
            for r in ordered
        )

    def apply_reviews(self, reviews: tuple[Review, ...], summary: RatingSummary):
        """Make the review entities and rating summary match `reviews`.

        Existing entities are updated in place, so a resubmitted review keeps
        its id and creation time.
        """
        wanted = {review.review_id: review for review in reviews}

        with atomic_change(self):
            for entity in list(self.reviews):
                if str(entity.id) not in wanted:
                    self.remove_reviews(entity)

            existing = {str(entity.id): entity for entity in self.reviews}
            for review in reviews:
                entity = existing.get(review.review_id)
                if entity is None:
                    self.add_reviews(
                        ProductReview(
                            id=review.review_id,
                            reviewer_id=review.reviewer_id,
                            reviewer_name=review.reviewer_name,
                            rating=review.rating,
                            comment=review.comment,
                        )
                    )
                    continue
                if entity.rating != review.rating:
                    entity.rating = review.rating
                if (entity.comment or "") != review.comment:
                    entity.comment = review.comment

            self.number_of_reviews = summary.number_of_reviews
            self.average_rating = summary.average_rating

        self.updated_at = datetime.now()

    def record_review(self, review: Review, summary: RatingSummary):
        from catalogue.product.events import ProductReviewed

        self.raise_(
            ProductReviewed(
                product_id=self.id,
                review_id=review.review_id,
                reviewer_id=review.reviewer_id,
                rating=review.rating,
                number_of_reviews=summary.number_of_reviews,
                average_rating=summary.average_rating,
            )
        )

    def record_review_removal(self, review_id, summary: RatingSummary):
        from catalogue.product.events import ProductReviewRemoved

        self.raise_(
            ProductReviewRemoved(
                product_id=self.id,
                review_id=review_id,
                number_of_reviews=summary.number_of_reviews,
                average_rating=summary.average_rating,
            )
        )
