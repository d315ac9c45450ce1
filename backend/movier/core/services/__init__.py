from .catalog_service import TMDBMovieCatalog

__all__ = ["TMDBMovieCatalog"]
