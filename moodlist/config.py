from dotenv import load_dotenv
import os

load_dotenv()

# Base & data directories
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.getenv("MOODLIST_DATA_DIR", os.path.join(BASE_DIR, "data"))

# Storage files
PLAYLISTS_FILE = os.path.join(DATA_DIR, "playlists.json")

# Spotify credentials (client-credentials grant, no user scopes needed)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET")

# Spotify API constants
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

# Catalog fan-out
SEARCH_LIMIT_PER_TERM = int(os.getenv("SEARCH_LIMIT_PER_TERM", "5"))
MAX_CONCURRENT_SEARCHES = int(os.getenv("MAX_CONCURRENT_SEARCHES", "4"))
CATALOG_TIMEOUT_SECONDS = float(os.getenv("CATALOG_TIMEOUT_SECONDS", "10.0"))

# Generative service (any OpenAI-compatible endpoint)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")
LLM_BASE_URL = os.getenv("LLM_BASE_URL") or None

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma-separated list of allowed browser origins
CORS_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
]
