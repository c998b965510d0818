"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    seller_id: Identifier(required=True)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductUpdated:
    """A product's name, description, price, category, or stock changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    category: String(required=True)
    stock: Integer()


@catalogue.event(part_of="Product")
class ProductReviewed:
    """A review was added, or a reviewer's existing review was replaced."""

    __version__ = 1

    product_id: Identifier(required=True)
    review_id: Identifier(required=True)
    reviewer_id: Identifier(required=True)
    rating: Float(required=True)
    number_of_reviews: Integer(required=True)
    average_rating: Float(required=True)


@catalogue.event(part_of="Product")
class ProductReviewRemoved:
    __version__ = 1

    product_id: Identifier(required=True)
    review_id: Identifier(required=True)
    number_of_reviews: Integer(required=True)
    average_rating: Float(required=True)
