from typing import Any, List

import httpx
from pydantic import ValidationError

from app.core.config import settings
from app.core.errors import ProductServiceError
from app.core.logger import get_logger
from app.core.models import Product

logger = get_logger(__name__)


def products_url() -> str:
    """Build the product-service listing URL from settings."""
    base = settings.PRODUCT_SERVICE_URL.rstrip("/")
    path = settings.PRODUCT_SERVICE_PATH.lstrip("/")
    return f"{base}/{path}"


def parse_products(payload: Any) -> List[Product]:
    """Turn a product-service JSON body into Product records.

    Accepts either a bare list or an object wrapping the list under
    ``products`` or ``items``; a null ``products`` falls back to ``items``.

    Raises:
        ProductServiceError: If the payload is not a list of products.
    """
    if isinstance(payload, dict):
        wrapped = payload.get("products")
        payload = wrapped if wrapped is not None else payload.get("items")

    if not isinstance(payload, list):
        raise ProductServiceError("Product service returned an unexpected payload")

    try:
        return [Product.model_validate(item) for item in payload]
    except ValidationError as e:
        raise ProductServiceError(f"Product service returned an invalid product: {e}") from e


async def fetch_products(client: httpx.AsyncClient | None = None) -> List[Product]:
    """Fetch the full product catalog from product-service.

    Args:
        client (httpx.AsyncClient | None): Client to issue the request with. When
            omitted, a short-lived client is opened for this call.

    Returns:
        List[Product]: Catalog entries in the order the upstream returned them.

    Raises:
        ProductServiceError: If the service is unreachable, times out, answers with
            a non-2xx status, or returns something other than a product list.
    """
    url = products_url()
    logger.info("Fetching products from %s", url)

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.PRODUCT_SERVICE_TIMEOUT) as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url, timeout=settings.PRODUCT_SERVICE_TIMEOUT)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as e:
        raise ProductServiceError(
            f"Product service responded with status {e.response.status_code}"
        ) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise ProductServiceError(f"Product service request failed: {e!r}") from e
    except ValueError as e:
        raise ProductServiceError("Product service returned a non-JSON body") from e

    products = parse_products(payload)
    logger.info("Fetched %d products", len(products))
    return products
