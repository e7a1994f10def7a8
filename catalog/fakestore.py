# catalog/fakestore.py
import math
import os
from typing import Any, List, Optional

import requests
from tenacity import (
    RetryError,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from core.logger import get_logger
from core.models import CatalogItem

logger = get_logger(__name__)

BASE_URL = os.getenv("CATALOG_BASE_URL", "https://fakestoreapi.com").rstrip("/")
TIMEOUT = float(os.getenv("CATALOG_TIMEOUT", "30"))
MAX_ATTEMPTS = int(os.getenv("CATALOG_MAX_ATTEMPTS", "5"))
USER_AGENT = os.getenv("CATALOG_USER_AGENT", "storefront/0.1 (+python-requests)")
PROXY_URL = os.getenv("CATALOG_PROXY_URL", "").strip()

SESSION = requests.Session()
SESSION.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})
if PROXY_URL:
    SESSION.proxies.update({"http": PROXY_URL, "https": PROXY_URL})


class CatalogError(Exception):
    """Raised inside the gateway when a response cannot be used."""


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return True
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return exc.response.status_code >= 500
    return False


@retry(
    retry=retry_if_exception(_is_transient),
    wait=wait_exponential_jitter(initial=1, max=30),
    stop=stop_after_attempt(MAX_ATTEMPTS),
)
def _fetch(url: str) -> Any:
    """
    GET a JSON document. Returns None for an empty body, which is how the
    Fake Store API answers an unknown product id.
    """
    r = SESSION.get(url, timeout=TIMEOUT)
    r.raise_for_status()
    if not r.text or not r.text.strip():
        return None
    try:
        return r.json()
    except ValueError as e:
        raise CatalogError(f"Malformed JSON from {url}: {e}") from e


def _to_item(raw: Any) -> Optional[CatalogItem]:
    if not isinstance(raw, dict):
        return None
    try:
        item_id = int(raw["id"])
        price = float(raw.get("price"))
    except (KeyError, TypeError, ValueError):
        logger.debug("Skipping catalog record with bad id/price: %r", raw)
        return None
    if not math.isfinite(price):
        logger.debug("Skipping catalog record %s with non-finite price", item_id)
        return None

    return CatalogItem(
        id=item_id,
        title=str(raw.get("title") or "").strip(),
        category=str(raw.get("category") or ""),
        price=price,
        image=str(raw.get("image") or ""),
        description=str(raw.get("description") or ""),
    )


def _get(url: str) -> Any:
    try:
        return _fetch(url)
    except RetryError as e:
        logger.error("Catalog fetch failed for %s after retries: %s", url, e)
    except requests.HTTPError as e:
        logger.error("Catalog fetch for %s returned an HTTP error: %s", url, e)
    except Exception as e:
        logger.error("Catalog fetch threw unexpected exception for %s: %s", url, e)
    return None


def list_products() -> Optional[List[CatalogItem]]:
    """
    Fetch the whole product list. Returns None when the catalog could not be
    read; an empty list only when the catalog really is empty.
    """
    url = f"{BASE_URL}/products"
    logger.info("Fetching catalog from %s", url)

    data = _get(url)
    if data is None:
        return None
    if not isinstance(data, list):
        logger.error("Catalog at %s did not return a list: %r", url, type(data))
        return None

    items: List[CatalogItem] = []
    for raw in data:
        item = _to_item(raw)
        if item is not None:
            items.append(item)

    logger.info("Catalog: found %d products at %s", len(items), url)
    return items


def get_product(item_id: int) -> Optional[CatalogItem]:
    """
    Fetch one product. Returns None when it does not exist or the catalog
    could not be read.
    """
    url = f"{BASE_URL}/products/{item_id}"
    logger.info("Fetching product %s from %s", item_id, url)

    data = _get(url)
    if data is None:
        logger.info("Product %s not found", item_id)
        return None

    item = _to_item(data)
    if item is None:
        logger.error("Product %s at %s could not be parsed", item_id, url)
    return item
