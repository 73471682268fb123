import logging
from typing import List, Optional

import numpy as np

from cinefeel.core.constants import DEFAULT_GENRE, DEFAULT_LANGUAGE, DEFAULT_MOOD_VALUE, GENRES, LANGUAGES
from cinefeel.core.exceptions import CaptureUnavailableError
from cinefeel.schemas.analysis import (
    DEFAULT_EMOTION,
    EmotionLabel,
    EmotionResult,
    FlowError,
    Movie,
    Notification,
    RecommendationRequest,
    RecommendationResult,
)
from cinefeel.services.capture_service import CaptureClient, encode_frame
from cinefeel.services.emotion_service import analyze_emotion, emotion_for_mood
from cinefeel.services.recommendation_service import recommend_movies

logger = logging.getLogger(__name__)


class SessionController:
    """
    Presentation-side state for one user session.

    Holds the current emotion, selection and recommendations. State changes only
    through flow results (last write wins); failures become notifications.
    """

    def __init__(self, capture: Optional[CaptureClient] = None):
        self.capture = capture
        self.emotion: EmotionLabel = DEFAULT_EMOTION
        self.language: str = DEFAULT_LANGUAGE
        self.genre: str = DEFAULT_GENRE
        self.mood_value: int = DEFAULT_MOOD_VALUE
        self.recommendations: Optional[List[Movie]] = None
        self.notifications: List[Notification] = []

    @property
    def has_camera(self) -> bool:
        return self.capture is not None and self.capture.is_available

    def notify(self, title: str, description: str, variant: str = "destructive"):
        logger.info("%s: %s", title, description)
        self.notifications.append(Notification(title=title, description=description, variant=variant))

    def open_camera(self) -> bool:
        if self.capture is not None and self.capture.open():
            return True
        self.notify(
            "Camera Access Denied",
            "Please enable camera permissions in your settings to use this app.",
        )
        return False

    def select_language(self, language: str):
        if language not in LANGUAGES:
            raise ValueError(f"Unsupported language: {language}")
        self.language = language

    def select_genre(self, genre: str):
        if genre not in GENRES:
            raise ValueError(f"Unsupported genre: {genre}")
        self.genre = genre

    def set_mood(self, value: int) -> EmotionLabel:
        self.mood_value = max(0, min(100, value))
        self.emotion = emotion_for_mood(self.mood_value)
        return self.emotion

    def detect_emotion(self, frame: Optional[np.ndarray] = None) -> EmotionResult:
        """
        Runs the emotion flow on a frame the caller already read, or on a fresh
        capture when no frame is given. Without a frame there is no inference
        call and the current emotion is kept.
        """
        try:
            if frame is not None:
                encoder = self.capture.encode_frame if self.capture is not None else encode_frame
                webcam_feed = encoder(frame)
            elif self.has_camera:
                webcam_feed = self.capture.capture_frame()
            else:
                raise CaptureUnavailableError("Webcam feed not available.")
        except CaptureUnavailableError as e:
            logger.warning("Frame capture failed: %s", e)
            self.notify("Webcam Error", "Webcam feed not available.")
            return EmotionResult(emotion=DEFAULT_EMOTION, error=FlowError.CAPTURE_UNAVAILABLE)

        result = analyze_emotion(webcam_feed)
        self.emotion = result.emotion
        if result.error is not None:
            self.notify("Emotion Detection Failed", "Could not detect emotion. Using default.")
        return result

    def recommend(self) -> RecommendationResult:
        request = RecommendationRequest(emotion=self.emotion, language=self.language, genre=self.genre)
        result = recommend_movies(request)
        self.recommendations = result.movies
        if result.error is FlowError.EXTERNAL_CALL:
            self.notify("Recommendation Error", "Error recommending movie. Please try again.")
        elif result.error is not None:
            self.notify("No Recommendations", "No movies could be recommended. Please try again.")
        return result
