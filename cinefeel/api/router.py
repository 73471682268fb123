from fastapi import APIRouter, UploadFile, File
from fastapi.concurrency import run_in_threadpool

from cinefeel.core.constants import GENRES, LANGUAGES
from cinefeel.schemas.analysis import (
    EmotionLabel,
    EmotionRequest,
    EmotionResult,
    MoodRequest,
    OptionsResponse,
    RecommendationRequest,
    RecommendationResult,
)
from cinefeel.services.emotion_service import analyze_emotion, analyze_image_bytes, emotion_for_mood
from cinefeel.services.recommendation_service import recommend_movies

# Initialize the API Router
router = APIRouter()


@router.get("/")
async def root_status():
    return {"service": "CineFeel API", "status": "ok"}


@router.get("/options", response_model=OptionsResponse)
async def options():
    """Dropdown values for the front end."""
    return OptionsResponse(languages=LANGUAGES, genres=GENRES, emotions=list(EmotionLabel))


@router.post("/emotion", response_model=EmotionResult)
async def detect_emotion(payload: EmotionRequest):
    # Blocking Gemini call, run in the thread pool
    return await run_in_threadpool(analyze_emotion, payload.webcam_feed)


@router.post("/emotion/upload", response_model=EmotionResult)
async def detect_emotion_from_upload(file: UploadFile = File(...)):
    image_bytes = await file.read()
    return await run_in_threadpool(analyze_image_bytes, image_bytes, file.content_type)


@router.post("/mood", response_model=EmotionResult)
async def mood(payload: MoodRequest):
    return EmotionResult(emotion=emotion_for_mood(payload.value))


@router.post("/recommendations", response_model=RecommendationResult)
async def recommendations(payload: RecommendationRequest):
    # Failures come back as an empty list with an error kind, never as an HTTP error
    return await run_in_threadpool(recommend_movies, payload)
