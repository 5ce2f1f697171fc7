from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moodlist import __version__
from moodlist.api.health import router as health_router
from moodlist.api.playlists.routes import router as playlists_router
from moodlist.config import CORS_ORIGINS, LOG_LEVEL
from moodlist.core import configure_logging

configure_logging(LOG_LEVEL)

app = FastAPI(
    title="Mood Playlists API",
    version=__version__,
    description="Generate playlists from a free-text mood and extend them later.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, tags=["health"])
app.include_router(playlists_router, prefix="/playlists", tags=["playlists"])
