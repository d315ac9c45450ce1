from functools import lru_cache
from typing import Optional
from .config import get_settings
from .interfaces import TMDBConfig
from .tmdb_client import TMDBClient
from .services import TMDBMovieCatalog

class TMDBServiceFactory:
    """Factory class for creating TMDB services"""
    
    @staticmethod
    def create_movie_catalog(api_key: Optional[str] = None, language: Optional[str] = None) -> TMDBMovieCatalog:
        """Create the external movie catalog from settings"""
        settings = get_settings()
        api_key = api_key if api_key is not None else settings.TMDB_API_KEY
        
        if not api_key:
            return TMDBMovieCatalog(None)
        
        config = TMDBConfig(
            api_key=api_key,
            base_url=settings.TMDB_BASE_URL,
            language=language or settings.TMDB_LANGUAGE,
            timeout=settings.TMDB_TIMEOUT,
        )
        return TMDBMovieCatalog(TMDBClient(config))


@lru_cache(maxsize=1)
def get_movie_catalog() -> TMDBMovieCatalog:
    """Dependency to get the process-wide external movie catalog"""
    return TMDBServiceFactory.create_movie_catalog()
