import logging

import requests

from cinefeel.core.config import settings
from cinefeel.core.constants import PLACEHOLDER_POSTER_URL, TMDB_IMAGE_BASE_URL, TMDB_SEARCH_URL

logger = logging.getLogger(__name__)


def lookup_poster(title: str) -> str:
    """
    Searches TMDB for the title and returns the first result's poster URL.
    Never raises: any failure, empty result set or missing image resolves to the placeholder.
    """
    if not title or not title.strip():
        return PLACEHOLDER_POSTER_URL

    if not settings.TMDB_API_KEY:
        logger.warning("TMDB API Key not configured")
        return PLACEHOLDER_POSTER_URL

    params = {"api_key": settings.TMDB_API_KEY, "query": title}

    try:
        response = requests.get(TMDB_SEARCH_URL, params=params, timeout=settings.TMDB_TIMEOUT)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("TMDB API Error for '%s': %s", title, e)
        return PLACEHOLDER_POSTER_URL

    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        logger.info("TMDB: No results found for '%s'", title)
        return PLACEHOLDER_POSTER_URL

    poster_path = results[0].get("poster_path")
    if not poster_path or not isinstance(poster_path, str):
        logger.info("No poster_path in TMDB response for '%s'", title)
        return PLACEHOLDER_POSTER_URL

    return f"{TMDB_IMAGE_BASE_URL}{poster_path}"
