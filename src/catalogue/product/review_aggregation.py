"""Review reducer for products.

Each function takes the current reviews and returns a new tuple of reviews
together with the rating summary derived from it. Inputs are never mutated.
A product holds at most one review per reviewer: resubmitting replaces the
rating and comment of the existing review where it stands.

An empty review set summarises to zero reviews with an average of 0.0.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace

from catalogue.shared.errors import InvalidArgument, NotFound

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class Review:
    review_id: str
    reviewer_id: str
    reviewer_name: str
    rating: float
    comment: str = ""


@dataclass(frozen=True)
class ReviewSubmission:
    """A reviewer's rating and comment for one product.

    `review_id` is only used when the reviewer has no review yet.
    """

    review_id: str
    reviewer_id: str
    reviewer_name: str
    rating: float
    comment: str = ""


@dataclass(frozen=True)
class RatingSummary:
    number_of_reviews: int = 0
    average_rating: float = 0.0


def summarize(reviews: Iterable[Review]) -> RatingSummary:
    ratings = [review.rating for review in reviews]
    if not ratings:
        return RatingSummary(number_of_reviews=0, average_rating=0.0)
    return RatingSummary(number_of_reviews=len(ratings), average_rating=sum(ratings) / len(ratings))


def _validate(submission: ReviewSubmission) -> None:
    errors = {}
    rating = submission.rating
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        errors["rating"] = ["Rating must be a number"]
    elif not MIN_RATING <= rating <= MAX_RATING:
        errors["rating"] = [f"Rating must be between {MIN_RATING} and {MAX_RATING}"]

    if not submission.reviewer_id:
        errors["reviewer_id"] = ["Reviewer is required"]

    if errors:
        raise InvalidArgument(errors)


def upsert_review(
    reviews: Iterable[Review], submission: ReviewSubmission
) -> tuple[tuple[Review, ...], RatingSummary]:
    """Add `submission` as a new review, or update the reviewer's existing one.

    Raises:
        InvalidArgument: rating outside 1..5 or missing reviewer.
    """
    _validate(submission)

    updated = []
    replaced = False
    for review in reviews:
        if review.reviewer_id == submission.reviewer_id and not replaced:
            review = replace(review, rating=submission.rating, comment=submission.comment)
            replaced = True
        updated.append(review)

    if not replaced:
        updated.append(
            Review(
                review_id=submission.review_id,
                reviewer_id=submission.reviewer_id,
                reviewer_name=submission.reviewer_name,
                rating=submission.rating,
                comment=submission.comment,
            )
        )

    result = tuple(updated)
    return result, summarize(result)


def remove_review(reviews: Iterable[Review], review_id: str) -> tuple[tuple[Review, ...], RatingSummary]:
    """Drop the review identified by `review_id`.

    Raises:
        NotFound: no review with that id.
    """
    current = tuple(reviews)
    remaining = tuple(review for review in current if str(review.review_id) != str(review_id))
    if len(remaining) == len(current):
        raise NotFound({"review": [f"Review {review_id} does not exist"]})

    return remaining, summarize(remaining)


def list_reviews(reviews: Iterable[Review]) -> tuple[Review, ...]:
    return tuple(reviews)
