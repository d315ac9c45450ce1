from abc import ABC, abstractmethod
from typing import Any, Dict, List
from dataclasses import dataclass

@dataclass
class TMDBConfig:
    """Configuration class for TMDB API"""
    api_key: str
    base_url: str = "https://api.themoviedb.org/3"
    language: str = "en-US"
    timeout: int = 10

class TMDBResponse:
    """Response wrapper for TMDB API calls"""
    def __init__(self, data: Dict, status_code: int, success: bool):
        self.data = data
        self.status_code = status_code
        self.success = success

class TMDBError(Exception):
    """Custom exception for TMDB API errors"""
    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class TMDBClientInterface(ABC):
    """Abstract interface for TMDB client"""
    
    @abstractmethod
    def make_request(self, endpoint: str, params: Dict = None) -> TMDBResponse:
        pass

class MovieCatalogInterface(ABC):
    """Contract of the external movie catalog consumed by the import flow"""
    
    @abstractmethod
    def search(self, query: str) -> List[Dict[str, Any]]:
        """Return raw search hits: id, title, release_date, overview, poster_path"""
        pass
    
    @abstractmethod
    def detail(self, external_id: int) -> Dict[str, Any]:
        """Return raw detail: title, release_date, overview, poster_path, genres"""
        pass
