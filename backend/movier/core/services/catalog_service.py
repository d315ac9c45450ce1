import logging
from typing import Any, Dict, List, Optional
from fastapi import status
from ..cache import CacheService
from ..exceptions import NotFoundError, UpstreamError
from ..interfaces import MovieCatalogInterface, TMDBClientInterface, TMDBError, TMDBResponse

logger = logging.getLogger(__name__)

CACHE_TTL_24H = 24 * 60 * 60

class TMDBMovieCatalog(MovieCatalogInterface):
    """External movie catalog backed by TMDB"""
    
    def __init__(self, client: Optional[TMDBClientInterface], cache: Optional[CacheService] = None):
        # client is None when no API key is configured
        self.client = client
        self.cache = cache or CacheService()
    
    def _request(self, endpoint: str, params: Dict = None) -> TMDBResponse:
        if self.client is None:
            raise UpstreamError(
                "External catalog API key is not configured",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        try:
            response = self.client.make_request(endpoint, params)
        except TMDBError as e:
            raise UpstreamError(e.message)
        
        if not response.success:
            message = response.data.get("status_message") or f"External catalog request failed ({response.status_code})"
            if response.status_code == status.HTTP_404_NOT_FOUND:
                raise NotFoundError("Movie not found in external catalog")
            raise UpstreamError(message)
        return response
    
    def search(self, query: str) -> List[Dict[str, Any]]:
        """Search movies by title"""
        response = self._request("search/movie", {"query": query, "include_adult": "false", "page": 1})
        return response.data.get("results") or []
    
    def detail(self, external_id: int) -> Dict[str, Any]:
        """Get movie details by external ID"""
        cache_key = f"tmdb:movie:{external_id}:details"
        cached = self.cache.get_json(cache_key)
        if cached is not None:
            return cached
        response = self._request(f"movie/{external_id}")
        self.cache.set_json(cache_key, response.data, CACHE_TTL_24H)
        return response.data
