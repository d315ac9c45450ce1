import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from movier.routers import health, auth, movies, me, external
from movier.core.config import get_settings
from movier.db import Base, SessionLocal, engine
from movier import models  # ensure models are imported
from movier.services.movie_service import MovieService

settings = get_settings()
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Movier API",
    description="Movie catalog, reviews and watchlists",
    version="1.0.0"
)

origins_env = settings.CORS_ALLOW_ORIGINS or ""
origins = [o.strip() for o in origins_env.split(",") if o.strip()] or [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(movies.router)
app.include_router(me.router)
app.include_router(external.router)


@app.on_event("startup")
def init_db():
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
    if settings.SEED_MOVIES:
        db = SessionLocal()
        try:
            MovieService(db).seed_movies()
        finally:
            db.close()
    logger.info("Movier API started")
