"""
Tests for the recommendation flow and poster enrichment.
The Gemini model and the poster lookup are patched; no network access.
"""
import json
import time

import pytest
from unittest.mock import patch

from cinefeel.core.config import settings
from cinefeel.core.constants import PLACEHOLDER_POSTER_URL
from cinefeel.schemas.analysis import FlowError, MovieCandidate, RecommendationRequest
from cinefeel.services.recommendation_service import enrich_with_posters, parse_candidates, recommend_movies

MODEL_PATH = "cinefeel.services.recommendation_service.recommendation_model"
LOOKUP_PATH = "cinefeel.services.recommendation_service.lookup_poster"

THREE_COMEDIES = [
    {"title": "A", "genre": "Comedy"},
    {"title": "B", "genre": "Comedy"},
    {"title": "C", "genre": "Comedy"},
]


@pytest.fixture
def happy_request():
    return RecommendationRequest(emotion="Happy", language="English", genre="Comedy")


@pytest.fixture(autouse=True)
def posters_enabled():
    with patch.object(settings, "ENABLE_POSTERS", True):
        yield


class TestParseCandidates:
    """Tests for reading the model's JSON answer."""

    def test_parses_bare_array(self):
        candidates = parse_candidates(json.dumps(THREE_COMEDIES))

        assert [c.title for c in candidates] == ["A", "B", "C"]

    def test_parses_movies_object_with_fences(self):
        raw = "```json\n" + json.dumps({"movies": THREE_COMEDIES}) + "\n```"

        assert len(parse_candidates(raw)) == 3

    def test_keeps_model_poster_url(self):
        raw = json.dumps([{"title": "A", "genre": "Drama", "posterUrl": "https://x/a.jpg"}])

        assert parse_candidates(raw)[0].poster_url == "https://x/a.jpg"

    @pytest.mark.parametrize("raw", [
        None,
        "",
        "not json",
        json.dumps({"recommendations": THREE_COMEDIES}),
        json.dumps([{"title": "A"}]),
        json.dumps([{"title": "  ", "genre": "Comedy"}]),
        json.dumps([{"title": "A", "genre": ""}]),
        json.dumps("A, B, C"),
    ])
    def test_malformed_output_raises_value_error(self, raw):
        with pytest.raises(ValueError):
            parse_candidates(raw)


class TestEnrichWithPosters:
    """Tests for the concurrent, order-preserving poster fan-out."""

    def test_order_preserved_regardless_of_completion_order(self):
        titles = ["slow", "medium", "fast"]
        delays = {"slow": 0.3, "medium": 0.15, "fast": 0.0}
        completed = []

        def fake_lookup(title):
            time.sleep(delays[title])
            completed.append(title)
            return f"https://posters/{title}.jpg"

        candidates = [MovieCandidate(title=t, genre="Drama") for t in titles]
        with patch(LOOKUP_PATH, side_effect=fake_lookup):
            movies = enrich_with_posters(candidates, "French")

        assert completed[0] == "fast"
        assert [m.title for m in movies] == titles
        assert [m.poster_url for m in movies] == [f"https://posters/{t}.jpg" for t in titles]
        assert all(m.language == "French" for m in movies)

    def test_one_entry_per_candidate(self):
        candidates = [MovieCandidate(title=f"Movie {i}", genre="Drama") for i in range(7)]

        with patch(LOOKUP_PATH, return_value=PLACEHOLDER_POSTER_URL):
            movies = enrich_with_posters(candidates)

        assert len(movies) == 7


class TestRecommendMovies:
    """Tests for the flow entry point."""

    def test_failed_lookup_gets_placeholder(self, happy_request, gemini_response):
        def fake_lookup(title):
            if title == "B":
                return PLACEHOLDER_POSTER_URL
            return f"https://image.tmdb.org/t/p/w500/{title.lower()}.jpg"

        with patch(MODEL_PATH) as model, patch(LOOKUP_PATH, side_effect=fake_lookup):
            model.generate_content.return_value = gemini_response(json.dumps(THREE_COMEDIES))

            result = recommend_movies(happy_request)

        assert result.error is None
        assert [m.title for m in result.movies] == ["A", "B", "C"]
        assert result.movies[1].poster_url == PLACEHOLDER_POSTER_URL
        assert result.movies[0].poster_url == "https://image.tmdb.org/t/p/w500/a.jpg"
        assert result.movies[2].poster_url == "https://image.tmdb.org/t/p/w500/c.jpg"
        assert all(m.title and m.genre for m in result.movies)

    def test_prompt_contains_request_fields(self, happy_request, gemini_response):
        with patch(MODEL_PATH) as model, patch(LOOKUP_PATH, return_value=PLACEHOLDER_POSTER_URL):
            model.generate_content.return_value = gemini_response(json.dumps(THREE_COMEDIES))

            recommend_movies(happy_request)

        prompt = model.generate_content.call_args.args[0]
        for value in ("Happy", "English", "Comedy"):
            assert value in prompt

    def test_model_exception_returns_empty_list(self, happy_request):
        with patch(MODEL_PATH) as model, patch(LOOKUP_PATH) as lookup:
            model.generate_content.side_effect = RuntimeError("quota exceeded")

            result = recommend_movies(happy_request)

        assert result.movies == []
        assert result.error == FlowError.EXTERNAL_CALL
        lookup.assert_not_called()

    @pytest.mark.parametrize("answer", ["[]", "{}", "garbage", None, json.dumps([{"title": "A"}])])
    def test_malformed_or_empty_answer_returns_empty_list(self, happy_request, gemini_response, answer):
        with patch(MODEL_PATH) as model, patch(LOOKUP_PATH) as lookup:
            model.generate_content.return_value = gemini_response(answer)

            result = recommend_movies(happy_request)

        assert result.movies == []
        assert result.error == FlowError.MALFORMED_OUTPUT
        lookup.assert_not_called()

    def test_posters_disabled_keeps_model_urls(self, happy_request, gemini_response):
        answer = json.dumps([{"title": "A", "genre": "Comedy", "posterUrl": "https://x/a.jpg"},
                             {"title": "B", "genre": "Comedy"}])

        with patch.object(settings, "ENABLE_POSTERS", False), \
                patch(MODEL_PATH) as model, patch(LOOKUP_PATH) as lookup:
            model.generate_content.return_value = gemini_response(answer)

            result = recommend_movies(happy_request)

        lookup.assert_not_called()
        assert [m.poster_url for m in result.movies] == ["https://x/a.jpg", None]
        assert all(m.language == "English" for m in result.movies)


class TestRecommendationRequest:
    """Tests for request normalization."""

    @pytest.mark.parametrize("emotion", [None, "", "   "])
    def test_empty_emotion_becomes_neutral(self, emotion):
        request = RecommendationRequest(emotion=emotion, language="English", genre="Drama")

        assert request.emotion == "Neutral"

    def test_alias_is_canonicalized(self):
        request = RecommendationRequest(emotion="happiness", language="English", genre="Drama")

        assert request.emotion == "Happy"

    def test_free_text_emotion_passes_through(self):
        request = RecommendationRequest(emotion="Nostalgic", language="English", genre="Drama")

        assert request.emotion == "Nostalgic"

    def test_request_is_immutable(self, happy_request):
        with pytest.raises(Exception):
            happy_request.genre = "Horror"
