import logging
import re
from typing import Optional

from cinefeel.core.constants import MOOD_SCALE
from cinefeel.core.exceptions import InvalidImagePayloadError
from cinefeel.core.models import emotion_model, extract_text, REQUEST_OPTIONS
from cinefeel.core.prompts import build_emotion_prompt
from cinefeel.schemas.analysis import DEFAULT_EMOTION, EmotionLabel, EmotionResult, FlowError
from cinefeel.utils.image import decode_data_uri, detect_image_mime
from cinefeel.utils.timer import ExecutionTimer

logger = logging.getLogger(__name__)

WORD_PATTERN = re.compile(r"[A-Za-z]+")


def parse_emotion_label(raw_text: Optional[str]) -> Optional[EmotionLabel]:
    """
    Interprets the model's free-text answer.
    A label as the first word wins; otherwise the text must name exactly one
    label ("Not happy, rather sad" is ambiguous). Returns None if no label fits.
    """
    if not raw_text:
        return None
    words = WORD_PATTERN.findall(raw_text)
    if not words:
        return None

    first = EmotionLabel.from_text(words[0])
    if first is not None:
        return first

    mentioned = {label for label in map(EmotionLabel.from_text, words) if label is not None}
    if len(mentioned) == 1:
        return mentioned.pop()
    return None


def fallback_result(error: FlowError) -> EmotionResult:
    return EmotionResult(emotion=DEFAULT_EMOTION, error=error)


def analyze_image_bytes(image_bytes: bytes, mime_type: Optional[str] = None) -> EmotionResult:
    """
    Sends one image to the multimodal model and returns a single emotion label.
    Never raises: every failure ends in the Neutral label with the error kind set.
    """
    try:
        detected_mime = detect_image_mime(image_bytes)
    except InvalidImagePayloadError as e:
        logger.warning("Rejected image payload: %s", e)
        return fallback_result(FlowError.INVALID_PAYLOAD)

    if mime_type and mime_type != detected_mime:
        logger.debug("Declared MIME type %s differs from detected %s", mime_type, detected_mime)

    try:
        with ExecutionTimer("Gemini Emotion Analysis"):
            response = emotion_model.generate_content(
                [build_emotion_prompt(), {"mime_type": detected_mime, "data": image_bytes}],
                request_options=REQUEST_OPTIONS,
            )
    except Exception as e:
        logger.error("Error in emotion analysis call: %s", e)
        return fallback_result(FlowError.EXTERNAL_CALL)

    raw_text = extract_text(response)
    label = parse_emotion_label(raw_text)
    if label is None:
        logger.warning("Emotion analysis returned empty or invalid response: %r", raw_text)
        return fallback_result(FlowError.MALFORMED_OUTPUT)

    logger.info("Detected emotion: %s", label.value)
    return EmotionResult(emotion=label)


def analyze_emotion(webcam_feed: Optional[str]) -> EmotionResult:
    """Emotion flow entry point for a data URI (or bare base64) image payload."""
    try:
        _, image_bytes = decode_data_uri(webcam_feed)
    except InvalidImagePayloadError as e:
        logger.warning("Rejected image payload: %s", e)
        return fallback_result(FlowError.INVALID_PAYLOAD)
    return analyze_image_bytes(image_bytes)


def emotion_for_mood(value: int) -> EmotionLabel:
    """Maps a mood slider value (0-100) to the emotion of the nearest stop."""
    value = max(0, min(100, value))
    closest_stop = min(MOOD_SCALE, key=lambda stop: abs(stop - value))
    return EmotionLabel(MOOD_SCALE[closest_stop])
