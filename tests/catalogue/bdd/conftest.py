"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from catalogue.product.review_aggregation import ReviewSubmission, summarize, upsert_review
from catalogue.shared.errors import InvalidArgument
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a product with no reviews", target_fixture="reviews")
def no_reviews():
    return ()


@given(parsers.cfparse('{reviewer} has rated the product {rating:d}'), target_fixture="reviews")
def existing_review(reviews, reviewer, rating):
    submission = ReviewSubmission(
        review_id=f"review-{reviewer.lower()}",
        reviewer_id=reviewer.lower(),
        reviewer_name=reviewer,
        rating=rating,
    )
    reviews, _ = upsert_review(reviews, submission)
    return reviews


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the product has {count:d} reviews"))
@then(parsers.cfparse("the product has {count:d} review"))
def review_count(reviews, count):
    assert summarize(reviews).number_of_reviews == count
    assert len(reviews) == count


@then(parsers.cfparse("the average rating is {average:f}"))
def average_rating(reviews, average):
    assert summarize(reviews).average_rating == pytest.approx(average)


@then("the review is rejected")
def review_rejected(error):
    assert isinstance(error["exc"], InvalidArgument)
