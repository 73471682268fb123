from typing import Dict, List

# --- POSTER LOOKUP (TMDB) ---
TMDB_SEARCH_URL = "https://api.themoviedb.org/3/search/movie"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"
PLACEHOLDER_POSTER_URL = "https://upload.wikimedia.org/wikipedia/commons/6/64/Poster_not_available.jpg"

# --- SELECTION LISTS (shown as dropdowns by the front end) ---
LANGUAGES: List[str] = [
    "English", "Hindi", "Spanish", "French", "German", "Mandarin",
    "Japanese", "Russian", "Bengali", "Telugu", "Marathi", "Tamil",
    "Urdu", "Gujarati", "Kannada", "Odia", "Malayalam", "Punjabi",
]

GENRES: List[str] = [
    "Action", "Comedy", "Drama", "Thriller", "Horror", "Sci-Fi",
    "Romance", "Animation", "Adventure", "Fantasy", "Mystery", "Crime",
    "Documentary", "Historical", "Musical", "Western",
]

DEFAULT_LANGUAGE = "English"
DEFAULT_GENRE = "Action"

# Mood slider stops (0-100) and the emotion each one stands for
MOOD_SCALE: Dict[int, str] = {
    0: "Angry",
    25: "Sad",
    50: "Neutral",
    75: "Happy",
    100: "Excited",
}
DEFAULT_MOOD_VALUE = 50
