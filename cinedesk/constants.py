"""Application constants - centralized configuration values."""

# =============================================================================
# Pagination
# =============================================================================
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
API_TIMEOUT_EXTERNAL = 15.0
API_TIMEOUT_UPLOAD = 120.0  # Video uploads can be large
HTTPX_TIMEOUT = 10.0

# =============================================================================
# Interactive form behaviour (in seconds)
# =============================================================================
SEARCH_DEBOUNCE_SECONDS = 0.4
BROWSE_DEBOUNCE_SECONDS = 0.4
SEARCH_REFOCUS_DELAY = 0.1

# =============================================================================
# Film form defaults
# =============================================================================
DEFAULT_FILM_DURATION = 90
MAX_MAPPED_CAST = 10
ADMIN_FILMS_PATH = "/admin/films"

# =============================================================================
# Homepage category heuristics
# =============================================================================
CATEGORY_TOP_MIN_VOTES = 1000
CATEGORY_TOP_MIN_POPULARITY = 100
CATEGORY_NEW_MAX_AGE_YEARS = 1

# =============================================================================
# Audit log
# =============================================================================
ADMIN_ACTION_ADD_FILM = "ADD_FILM"

# =============================================================================
# Object storage
# =============================================================================
BUCKET_ACTOR_PHOTOS = "actor-photos"
BUCKET_FILM_POSTERS = "film-posters"
BUCKET_FILM_BACKDROPS = "film-backdrops"
BUCKET_FILM_VIDEOS = "film-videos"
STORAGE_CACHE_CONTROL = "3600"
LOCAL_MEDIA_URL_PREFIX = "/media"

# =============================================================================
# Session & Security
# =============================================================================
SESSION_TIMEOUT_DAYS = 7
SESSION_COOKIE_NAME = "cinedesk_session"

# =============================================================================
# External API URLs
# =============================================================================
TMDB_API_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v="
YOUTUBE_SITE = "YouTube"

# =============================================================================
# Image sizes (TMDB size prefixes)
# =============================================================================
IMAGE_SIZE_POSTER = "w500"
IMAGE_SIZE_BACKDROP = "w780"
IMAGE_SIZE_CAST = "w185"
IMAGE_SIZE_DETAIL_POSTER = "w300"
IMAGE_SIZE_ORIGINAL = "original"

PLACEHOLDER_BACKDROP = "/placeholder-backdrop.jpg"
PLACEHOLDER_POSTER = "/placeholder-poster.png"
