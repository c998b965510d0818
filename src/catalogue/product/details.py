"""Product details management: command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.shared.errors import NotFound


@catalogue.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float(min_value=0.0)
    category: String(max_length=100)
    stock: Integer(min_value=0, max_value=9999)


def load_product(product_id) -> Product:
    """Fetch a product, raising NotFound when it does not exist."""
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFound({"product": [f"Product {product_id} not found"]}) from None


@catalogue.command_handler(part_of=Product)
class ManageProductDetailsHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        product = load_product(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            stock=command.stock,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
