from functools import lru_cache

from .config import get_settings
from .repository import HttpProductRepository


@lru_cache()
def get_repository() -> HttpProductRepository:
    settings = get_settings()
    url = str(settings.product_api_url)

    if "your-shop-api.example" in url:
        raise RuntimeError(
            "PRODUCT_API_URL in .env is still the placeholder. "
            "Point it at the shop REST API (e.g. http://localhost:3000/api)."
        )
    return HttpProductRepository(url, timeout=settings.product_api_timeout)
