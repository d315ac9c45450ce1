import requests
import logging
from typing import Dict
from .interfaces import TMDBClientInterface, TMDBResponse, TMDBConfig, TMDBError

logger = logging.getLogger(__name__)

class TMDBClient(TMDBClientInterface):
    """requests-based TMDB v3 client"""
    
    def __init__(self, config: TMDBConfig):
        self.config = config
        self.session = requests.Session()
        self.session.headers.update({
            "accept": "application/json"
        })
    
    def make_request(self, endpoint: str, params: Dict = None) -> TMDBResponse:
        """Make HTTP GET request to TMDB API"""
        url = f"{self.config.base_url}/{endpoint.lstrip('/')}"
        query = {
            key: str(value) for key, value in (params or {}).items()
            if value is not None and value != ""
        }
        query["api_key"] = self.config.api_key
        if self.config.language:
            query["language"] = self.config.language
        
        try:
            logger.info(f"Making request to: {url}")
            response = self.session.get(url, params=query, timeout=self.config.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request exception: {str(e)}")
            raise TMDBError(f"Request failed: {str(e)}")
        
        try:
            data = response.json()
        except ValueError:
            data = None
        
        if response.status_code == 200:
            if not isinstance(data, dict):
                logger.error(f"Unexpected response body from {url}: {response.text[:200]}")
                raise TMDBError("Unexpected response body", response.status_code)
            return TMDBResponse(data, response.status_code, True)
        
        if not isinstance(data, dict):
            data = {}
        
        logger.error(f"API request failed: {response.status_code} - {response.text}")
        return TMDBResponse(data, response.status_code, False)
