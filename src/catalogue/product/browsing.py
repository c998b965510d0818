"""Read-side queries over products: single lookup, browsing and vendor listings."""

import structlog

from catalogue.product.details import load_product
from catalogue.product.product import Product
from catalogue.search.composer import ComposedQuery, compose
from catalogue.search.executor import QueryPage, execute
from catalogue.search.params import QueryParameters, resolve_page_size
from shared import config

logger = structlog.get_logger(__name__)

_ORDERING = "-created_at"


def get_product(product_id) -> Product:
    return load_product(product_id)


def _browse(scope, raw_params) -> QueryPage:
    params = QueryParameters.parse(raw_params)
    page_size = resolve_page_size(params, config.DEFAULT_PAGE_SIZE)
    query = compose(scope, params, page_size)

    if query.ignored:
        logger.warning("Ignoring unsupported filter operators", ignored=list(query.ignored))

    return execute(Product, query, order_by=_ORDERING)


def list_products(raw_params=None) -> QueryPage:
    """Search, filter and page over the whole catalogue."""
    return _browse(None, raw_params)


def list_vendor_products(vendor_id, raw_params=None) -> QueryPage:
    """Search, filter and page over the products one vendor sells."""
    return _browse({"seller_id": str(vendor_id)}, raw_params)


def list_all_products() -> list[Product]:
    """Every product, unpaged, for administrators."""
    return execute(Product, ComposedQuery(), order_by=_ORDERING).items
