from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Dict, List, Optional

# --- ENUMERATIONS ---

# EmotionLabel Enum: the closed vocabulary the emotion flow may return
class EmotionLabel(str, Enum):
    HAPPY = "Happy"
    SAD = "Sad"
    ANGRY = "Angry"
    NEUTRAL = "Neutral"
    EXCITED = "Excited"
    DISGUSTED = "Disgusted"
    SURPRISED = "Surprised"
    FEARFUL = "Fearful"

    @classmethod
    def from_text(cls, text: Optional[str]) -> Optional["EmotionLabel"]:
        """
        Maps a single word (any case, noun or adjective form) to a label.
        Returns None when the word is not part of the vocabulary.
        """
        if not text:
            return None
        return EMOTION_ALIASES.get(text.strip().lower())


DEFAULT_EMOTION = EmotionLabel.NEUTRAL

# Noun forms are what facial-expression models usually report (Happiness, Anger...)
EMOTION_ALIASES: Dict[str, EmotionLabel] = {label.value.lower(): label for label in EmotionLabel}
EMOTION_ALIASES.update({
    "happiness": EmotionLabel.HAPPY, "joy": EmotionLabel.HAPPY,
    "sadness": EmotionLabel.SAD,
    "anger": EmotionLabel.ANGRY,
    "calm": EmotionLabel.NEUTRAL,
    "excitement": EmotionLabel.EXCITED,
    "disgust": EmotionLabel.DISGUSTED,
    "surprise": EmotionLabel.SURPRISED,
    "fear": EmotionLabel.FEARFUL, "afraid": EmotionLabel.FEARFUL, "scared": EmotionLabel.FEARFUL,
})


# FlowError Enum: why a flow substituted its fallback value
class FlowError(str, Enum):
    EXTERNAL_CALL = "external_call"
    MALFORMED_OUTPUT = "malformed_output"
    INVALID_PAYLOAD = "invalid_payload"
    CAPTURE_UNAVAILABLE = "capture_unavailable"


# --- PYDANTIC SCHEMAS ---

class EmotionRequest(BaseModel):
    # data:image/jpeg;base64,... (a bare base64 string is accepted too)
    webcam_feed: str = Field(..., min_length=1)


class EmotionResult(BaseModel):
    emotion: EmotionLabel = DEFAULT_EMOTION
    error: Optional[FlowError] = None


class MoodRequest(BaseModel):
    value: int = Field(..., ge=0, le=100)


class RecommendationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    emotion: str = DEFAULT_EMOTION.value
    language: str = Field(..., min_length=1)
    genre: str = Field(..., min_length=1)

    @field_validator("emotion", mode="before")
    @classmethod
    def normalize_emotion(cls, value):
        # An empty emotion never reaches the model
        if value is None:
            return DEFAULT_EMOTION.value
        if isinstance(value, EmotionLabel):
            return value.value
        text = str(value).strip()
        if not text:
            return DEFAULT_EMOTION.value
        label = EmotionLabel.from_text(text)
        return label.value if label else text


# A movie as returned by the recommendation model, before poster enrichment
class MovieCandidate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    title: str = Field(..., min_length=1)
    genre: str = Field(..., min_length=1)
    poster_url: Optional[str] = Field(default=None, alias="posterUrl")


# Sent to the front end as {title, genre, posterUrl, language}
class Movie(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    genre: str
    poster_url: Optional[str] = Field(default=None, alias="posterUrl")
    language: Optional[str] = None


class RecommendationResult(BaseModel):
    movies: List[Movie] = Field(default_factory=list)
    error: Optional[FlowError] = None


class OptionsResponse(BaseModel):
    languages: List[str]
    genres: List[str]
    emotions: List[EmotionLabel]


class Notification(BaseModel):
    title: str
    description: str
    variant: str = "destructive"
