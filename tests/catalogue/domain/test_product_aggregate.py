import pytest
from catalogue.product.events import ProductCreated, ProductReviewed, ProductReviewRemoved, ProductUpdated
from catalogue.product.product import Product
from catalogue.product.review_aggregation import RatingSummary, ReviewSubmission, remove_review, upsert_review
from protean.exceptions import ValidationError
from protean.utils.reflection import declared_fields


def _submit(product, reviewer_id, rating, comment="", review_id=None):
    submission = ReviewSubmission(
        review_id=review_id or f"review-{reviewer_id}",
        reviewer_id=reviewer_id,
        reviewer_name=f"Reviewer {reviewer_id}",
        rating=rating,
        comment=comment,
    )
    reviews, summary = upsert_review(product.review_records(), submission)
    product.apply_reviews(reviews, summary)
    return summary


class TestProductStructure:
    def test_declared_fields(self):
        fields = declared_fields(Product)
        for name in ["name", "price", "category", "stock", "seller_id", "images", "reviews", "average_rating"]:
            assert name in fields


class TestProductCreation:
    def test_create_sets_defaults(self, make_product):
        product = make_product()

        assert product.name == "Trail Running Shoe"
        assert product.number_of_reviews == 0
        assert product.average_rating == 0.0
        assert len(product.images) == 1
        assert product.images[0].public_id == "storefront/products/abc"
        assert product.created_at is not None

    def test_create_raises_event(self, make_product):
        product = make_product()

        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductCreated)
        assert event.name == "Trail Running Shoe"
        assert event.seller_id == "seller-001"

    def test_stock_defaults_to_one(self, make_product):
        assert make_product(stock=None).stock == 1

    def test_negative_price_is_rejected(self, make_product):
        with pytest.raises(ValidationError):
            make_product(price=-1.0)

    def test_stock_above_maximum_is_rejected(self, make_product):
        with pytest.raises(ValidationError):
            make_product(stock=10000)

    def test_name_is_required(self, make_product):
        with pytest.raises(ValidationError):
            make_product(name=None)


class TestProductDetails:
    def test_partial_update(self, make_product):
        product = make_product()
        product._events.clear()

        product.update_details(price=99.5, stock=3)

        assert product.price == 99.5
        assert product.stock == 3
        assert product.name == "Trail Running Shoe"
        assert isinstance(product._events[-1], ProductUpdated)


class TestProductReviews:
    def test_review_summary_is_synced(self, make_product):
        product = make_product()
        _submit(product, "u1", 4)
        _submit(product, "u2", 2)

        assert product.number_of_reviews == 2
        assert product.average_rating == 3.0
        assert [r.reviewer_id for r in product.review_records()] == ["u1", "u2"]

    def test_resubmission_keeps_review_identity(self, make_product):
        product = make_product()
        _submit(product, "u1", 4, "ok")
        _submit(product, "u1", 2, "meh", review_id="should-not-be-used")

        records = product.review_records()
        assert len(records) == 1
        assert records[0].review_id == "review-u1"
        assert records[0].rating == 2
        assert records[0].comment == "meh"
        assert product.average_rating == 2

    def test_removing_last_review_resets_summary(self, make_product):
        product = make_product()
        _submit(product, "u1", 5)

        reviews, summary = remove_review(product.review_records(), "review-u1")
        product.apply_reviews(reviews, summary)

        assert len(product.reviews) == 0
        assert product.number_of_reviews == 0
        assert product.average_rating == 0.0

    def test_review_count_cannot_drift(self, make_product):
        product = make_product()

        with pytest.raises(ValidationError):
            product.number_of_reviews = 3

    def test_average_cannot_drift(self, make_product):
        product = make_product()
        _submit(product, "u1", 4)

        with pytest.raises(ValidationError):
            product.average_rating = 5.0

    def test_apply_rejects_inconsistent_summary(self, make_product):
        product = make_product()
        reviews, _ = upsert_review(
            (), ReviewSubmission(review_id="r1", reviewer_id="u1", reviewer_name="U", rating=4)
        )

        with pytest.raises(ValidationError):
            product.apply_reviews(reviews, RatingSummary(number_of_reviews=1, average_rating=1.0))

    def test_review_events(self, make_product):
        product = make_product()
        summary = _submit(product, "u1", 4)
        record = product.review_records()[0]

        product.record_review(record, summary)
        product.record_review_removal(record.review_id, RatingSummary())

        assert isinstance(product._events[-2], ProductReviewed)
        assert product._events[-2].average_rating == 4
        assert isinstance(product._events[-1], ProductReviewRemoved)
