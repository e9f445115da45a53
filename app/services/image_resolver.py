import random
import re
import time
from typing import List, Optional
import requests
from app.core.config import AppConfig, app_config
from app.core.logging_config import get_logger

logger = get_logger(__name__)

FALLBACK_IMAGES = [
    "https://upload.wikimedia.org/wikipedia/commons/thumb/6/6d/Good_Food_Display_-_NCI_Visuals_Online.jpg/800px-Good_Food_Display_-_NCI_Visuals_Online.jpg",
    "https://upload.wikimedia.org/wikipedia/commons/thumb/5/5b/Chocolate_cake.jpg/800px-Chocolate_cake.jpg",
    "https://upload.wikimedia.org/wikipedia/commons/thumb/d/d3/Desserts.jpg/800px-Desserts.jpg",
    "https://upload.wikimedia.org/wikipedia/commons/thumb/f/f1/2ChocolateCake.jpg/800px-2ChocolateCake.jpg",
]

QUERY_SUFFIXES = ["dessert", "cake", "food", ""]
NON_IMAGE_FILE = re.compile(r"\.(svg|pdf|txt)$", re.IGNORECASE)
FILE_NAMESPACE = 6


class ImageResolver:
    """
    Finds a display image for a recipe name on Wikimedia Commons.

    Tries a few query variants and returns the first usable thumbnail. Any
    failure along the way ends the search and a random fallback image is
    returned instead, so `resolve` never raises.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        session: Optional[requests.Session] = None,
        rng: Optional[random.Random] = None,
        fallback_images: Optional[List[str]] = None,
    ):
        self.config = config or app_config
        self.session = session or requests.Session()
        self.rng = rng or random.Random()
        self.fallback_images = list(fallback_images or FALLBACK_IMAGES)

    def resolve(self, recipe_name: str) -> str:
        try:
            search_start = time.time()
            for query in build_queries(recipe_name):
                url = self._search(query)
                if url:
                    logger.info(
                        f"Commons image for '{recipe_name}' via '{query}': "
                        f"{time.time() - search_start:.2f}s"
                    )
                    return url
        except Exception as exc:
            logger.warning(f"Failed to fetch Commons image for '{recipe_name}': {exc}")

        return self.pick_fallback()

    def pick_fallback(self) -> str:
        return self.rng.choice(self.fallback_images)

    def _search(self, query: str) -> Optional[str]:
        data = self._get({
            "action": "query",
            "format": "json",
            "list": "search",
            "srsearch": query,
            "srnamespace": FILE_NAMESPACE,
            "srlimit": self.config.image_search_limit,
        })
        results = (data.get("query") or {}).get("search") or []
        for result in results:
            file_name = str(result.get("title", "")).replace("File:", "", 1)
            if not file_name or NON_IMAGE_FILE.search(file_name):
                continue
            url = self._image_url(file_name)
            if url:
                return url
        return None

    def _image_url(self, file_name: str) -> Optional[str]:
        data = self._get({
            "action": "query",
            "format": "json",
            "titles": f"File:{file_name}",
            "prop": "imageinfo",
            "iiprop": "url",
            "iiurlwidth": self.config.image_thumb_width,
        })
        pages = (data.get("query") or {}).get("pages") or {}
        if not pages:
            return None
        page = next(iter(pages.values())) or {}
        image_info = (page.get("imageinfo") or [{}])[0]
        url = image_info.get("thumburl") or image_info.get("url")
        if not url or "svg" in url.lower() or NON_IMAGE_FILE.search(url):
            return None
        return url

    def _get(self, params: dict) -> dict:
        response = self.session.get(
            self.config.commons_api_url,
            params=params,
            timeout=self.config.request_timeout_seconds,
        )
        response.raise_for_status()
        return response.json()


def normalize_name(recipe_name: str) -> str:
    text = re.sub(r"[^\w\s]", "", (recipe_name or "").lower())
    return " ".join(text.split())


def build_queries(recipe_name: str) -> List[str]:
    """Search variants for a recipe name, most specific first."""
    term = normalize_name(recipe_name)
    queries = []
    for suffix in QUERY_SUFFIXES:
        query = f"{term} {suffix}".strip()
        if query and query not in queries:
            queries.append(query)
    return queries
