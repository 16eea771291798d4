"""
Base API client with common functionality
"""

from abc import ABC
from typing import Optional, Dict, Any
import httpx
from tasknotes.utils.logger import logger
from tasknotes.utils.error_handler import ClientError


def _error_text(response: httpx.Response) -> str:
    """Best readable message from an error response"""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    
    if isinstance(body, dict):
        message = body.get("message") or response.reason_phrase
        if body.get("error"):
            return f"{message}: {body['error']}"
        return message
    return response.reason_phrase


class BaseAPIClient(ABC):
    """Base class for API clients with common functionality"""
    
    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize base API client
        
        Args:
            base_url: Base URL for API
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self.logger = logger
    
    async def _request(
        self,
        method: str,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make a single HTTP request (no retries)
        
        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint
            headers: Request headers
            params: Query parameters
            json_data: JSON body
            
        Returns:
            Decoded JSON body (None for an empty body)
            
        Raises:
            ClientError: On transport failure or a 4xx/5xx response
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        self.logger.debug(f"Request: {method} {url}")
        
        request_kwargs = {
            "method": method,
            "url": url,
            "headers": headers,
            "params": params,
        }
        if json_data is not None:
            request_kwargs["json"] = json_data
            self.logger.debug(f"Request JSON data: {json_data}")
        
        try:
            response = await self.client.request(**request_kwargs)
        except httpx.RequestError as e:
            self.logger.warning(f"Request error: {method} {url}: {e}")
            raise ClientError(f"Cannot reach {self.base_url}: {e}") from e
        
        self.logger.debug(f"Response status: {response.status_code}")
        if response.status_code >= 400:
            message = _error_text(response)
            self.logger.warning(f"Request failed with status {response.status_code}: {message}")
            raise ClientError(message, status_code=response.status_code)
        
        if response.status_code == 204 or not response.content.strip():
            return None
        
        try:
            return response.json()
        except ValueError as e:
            raise ClientError(f"Invalid JSON from {url}", status_code=response.status_code) from e
    
    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make GET request"""
        return await self._request("GET", endpoint, params=params)
    
    async def post(self, endpoint: str, json_data: Optional[Dict[str, Any]] = None) -> Any:
        """Make POST request"""
        return await self._request("POST", endpoint, json_data=json_data)
    
    async def put(self, endpoint: str, json_data: Optional[Dict[str, Any]] = None) -> Any:
        """Make PUT request"""
        return await self._request("PUT", endpoint, json_data=json_data)
    
    async def delete(self, endpoint: str) -> Any:
        """Make DELETE request"""
        return await self._request("DELETE", endpoint)
    
    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()
    
    async def __aenter__(self):
        """Async context manager entry"""
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
