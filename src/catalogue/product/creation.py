"""Product creation: command and handler.

Images arrive as a JSON array of sources (URLs or data URIs). Each one is
uploaded to the image store before the product is saved. If any upload fails,
or the product itself cannot be built or saved, the images already stored for
it are destroyed again.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from shared.media import ImageUploadFailed, destroy_image, upload_image

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0, max_value=99999999.0)
    category: String(required=True, max_length=100)
    stock: Integer(min_value=0, max_value=9999)
    seller_id: Identifier(required=True)
    images: Text()  # JSON array of image sources


def parse_image_sources(raw) -> list[str]:
    if not raw:
        return []
    try:
        sources = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        raise ValidationError({"images": ["Images must be a JSON array"]}) from None

    if isinstance(sources, str):
        sources = [sources]
    if not isinstance(sources, list) or not all(isinstance(s, str) and s for s in sources):
        raise ValidationError({"images": ["Images must be a list of image sources"]})
    return sources


def store_images(sources: list[str], folder: str) -> list[dict]:
    stored = []
    try:
        for source in sources:
            stored.append(upload_image(source, folder))
    except ImageUploadFailed:
        for image in stored:
            destroy_image(image["public_id"])
        raise
    return stored


@catalogue.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        sources = parse_image_sources(command.images)
        if not sources:
            raise ValidationError({"images": ["At least one product image is required"]})

        images = store_images(sources, folder="products")

        try:
            product = Product.create(
                name=command.name,
                description=command.description,
                price=command.price,
                category=command.category,
                stock=command.stock,
                seller_id=command.seller_id,
                images=images,
            )
            current_domain.repository_for(Product).add(product)
        except Exception:
            logger.warning("Product not saved, releasing images", image_count=len(images))
            for image in images:
                destroy_image(image["public_id"])
            raise

        logger.info(
            "Product created",
            product_id=str(product.id),
            seller_id=str(command.seller_id),
            image_count=len(images),
        )
        return str(product.id)
