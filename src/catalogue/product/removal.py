"""Product removal: command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.details import load_product
from catalogue.product.product import Product
from shared.media import destroy_image

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class DeleteProductHandler:
    @handle(DeleteProduct)
    def delete_product(self, command):
        product = load_product(command.product_id)

        for image in product.images:
            status = destroy_image(image.public_id)
            if status != "deleted":
                logger.warning("Product image was not in the image store", public_id=image.public_id, status=status)

        current_domain.repository_for(Product)._dao.delete(product)
        logger.info("Product deleted", product_id=str(command.product_id))
