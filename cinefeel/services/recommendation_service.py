import json
import logging
import concurrent.futures
from typing import List, Optional

from pydantic import TypeAdapter

from cinefeel.core.config import settings
from cinefeel.core.models import recommendation_model, extract_text, REQUEST_OPTIONS
from cinefeel.core.prompts import build_recommendation_prompt
from cinefeel.schemas.analysis import FlowError, Movie, MovieCandidate, RecommendationRequest, RecommendationResult
from cinefeel.services.poster_service import lookup_poster
from cinefeel.utils.timer import ExecutionTimer

logger = logging.getLogger(__name__)

_candidate_list = TypeAdapter(List[MovieCandidate])


# --- HELPER FUNCTIONS ---
def parse_candidates(raw_text: Optional[str]) -> List[MovieCandidate]:
    """
    Parses the model's JSON answer into candidates.
    Accepts a bare array or an object wrapping it under "movies".
    Raises ValueError (JSON or validation error) when the output is malformed.
    """
    if not raw_text:
        raise ValueError("Empty response")

    clean_json = raw_text.replace("```json", "").replace("```", "").strip()
    data = json.loads(clean_json)

    if isinstance(data, dict):
        data = data.get("movies")
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of movies")

    return _candidate_list.validate_python(data)


def enrich_with_posters(candidates: List[MovieCandidate], language: Optional[str] = None) -> List[Movie]:
    """
    Looks up a poster for every candidate concurrently.
    Results are stored by candidate index, so the output keeps the candidate order.
    """
    poster_urls: List[Optional[str]] = [None] * len(candidates)

    with ExecutionTimer(f"Poster Enrichment ({len(candidates)} Items)"):
        # Use ThreadPoolExecutor for concurrent fetching to speed up I/O-bound tasks
        with concurrent.futures.ThreadPoolExecutor(max_workers=settings.POSTER_MAX_WORKERS) as executor:
            futures = {
                executor.submit(lookup_poster, candidate.title): index
                for index, candidate in enumerate(candidates)
            }
            for future in concurrent.futures.as_completed(futures):
                poster_urls[futures[future]] = future.result()

    return [
        Movie(title=candidate.title, genre=candidate.genre, poster_url=poster_url, language=language)
        for candidate, poster_url in zip(candidates, poster_urls)
    ]


# --- MAIN LOGIC ---
def recommend_movies(request: RecommendationRequest) -> RecommendationResult:
    """
    Asks the model for movies matching (emotion, language, genre) and attaches posters.
    Never raises: a failed call or malformed answer yields an empty list with the error kind set.
    """
    prompt = build_recommendation_prompt(request)

    try:
        with ExecutionTimer(f"Gemini Recommendation ({request.emotion}/{request.language}/{request.genre})"):
            response = recommendation_model.generate_content(prompt, request_options=REQUEST_OPTIONS)
    except Exception as e:
        logger.error("Error in recommendation call: %s", e)
        return RecommendationResult(movies=[], error=FlowError.EXTERNAL_CALL)

    raw_text = extract_text(response)
    try:
        candidates = parse_candidates(raw_text)
    except ValueError as e:
        logger.warning("Movie recommendation returned invalid response: %s", e)
        return RecommendationResult(movies=[], error=FlowError.MALFORMED_OUTPUT)

    if not candidates:
        logger.warning("Movie recommendation returned no candidates.")
        return RecommendationResult(movies=[], error=FlowError.MALFORMED_OUTPUT)

    if not settings.ENABLE_POSTERS:
        movies = [
            Movie(title=c.title, genre=c.genre, poster_url=c.poster_url, language=request.language)
            for c in candidates
        ]
        return RecommendationResult(movies=movies)

    return RecommendationResult(movies=enrich_with_posters(candidates, request.language))
