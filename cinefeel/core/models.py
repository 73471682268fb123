import logging
from typing import Optional

import google.generativeai as genai
from google.generativeai.types import HarmCategory, HarmBlockThreshold

from cinefeel.core.config import settings

logger = logging.getLogger(__name__)

# --- GEMINI API CLIENT SETUP ---
genai.configure(api_key=settings.GEMINI_API_KEY)

safety_settings = [
    {"category": HarmCategory.HARM_CATEGORY_HARASSMENT, "threshold": HarmBlockThreshold.BLOCK_NONE},
    {"category": HarmCategory.HARM_CATEGORY_HATE_SPEECH, "threshold": HarmBlockThreshold.BLOCK_NONE},
    {"category": HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT, "threshold": HarmBlockThreshold.BLOCK_NONE},
    {"category": HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT, "threshold": HarmBlockThreshold.BLOCK_NONE},
]

# Multimodal model used to read the emotion off a webcam frame
emotion_model = genai.GenerativeModel(
    model_name=settings.GEMINI_MODEL,
    generation_config={
        "temperature": 0.2,  # Low: one label, no creativity needed
        "max_output_tokens": 16,
    },
    safety_settings=safety_settings
)

# Text model that returns the recommendation list as JSON
recommendation_model = genai.GenerativeModel(
    model_name=settings.GEMINI_MODEL,
    generation_config={
        "response_mime_type": "application/json",
        "temperature": 0.9,
        "top_p": 0.95,
    },
    safety_settings=safety_settings
)

REQUEST_OPTIONS = {"timeout": settings.GEMINI_TIMEOUT}


def extract_text(response) -> Optional[str]:
    """
    Returns the response text, or None when Gemini returned no usable candidate
    (e.g. the answer was blocked by a safety filter).
    """
    try:
        text = response.text
    except ValueError:
        logger.warning("Gemini returned an empty response. Reason: %s", getattr(response, "prompt_feedback", None))
        return None
    if not text or not text.strip():
        return None
    return text
