from cinefeel.schemas.analysis import EmotionLabel, RecommendationRequest

RECOMMENDATION_COUNT = 3


def build_emotion_prompt() -> str:
    """
        Instruction sent together with the webcam frame.
        Restricts the model to the closed emotion vocabulary and a one-word answer.
    """
    vocabulary = ", ".join(f'"{label.value}"' for label in EmotionLabel)

    return f"""
    You analyze a person's emotion from a single webcam image.
    The only emotions you may use are: {vocabulary}.

    Look at the face in the image and pick the one emotion that fits best.
    If no face is visible or you are unsure, answer "{EmotionLabel.NEUTRAL.value}".

    Answer with exactly one word from the list above and nothing else.

    Detected emotion:
    """


def build_recommendation_prompt(request: RecommendationRequest) -> str:
    """
        Constructs the JSON-output prompt for the recommendation model.
        The user's emotion, language and genre are interpolated; the answer must be a JSON array.
    """
    return f"""
    You are a movie expert. Recommend exactly {RECOMMENDATION_COUNT} movies for this user.

    User Emotion: {request.emotion}
    Movie Language: {request.language}
    Movie Genre: {request.genre}

    RULES:
    1. Every movie must be available in {request.language} and belong to the {request.genre} genre.
    2. Pick movies that suit someone who currently feels {request.emotion}.
    3. 'title': the movie's official title.
    4. 'genre': the movie's main genre.

    OUTPUT TEMPLATE (JSON array, no other text):
    [
        {{"title": "Movie Title", "genre": "{request.genre}"}}
    ]
    """
