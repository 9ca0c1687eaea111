"""
Base HTTP client for the public weather feeds.

Handles HTTP requests, session management, and error translation.
"""

import logging
from typing import Dict, Any, Optional

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore
from urllib3.util.retry import Retry  # type: ignore

from ..core.constants import DEFAULT_USER_AGENT
from ..core.exceptions import FetchError


class APIClient:
    """Base client for a JSON-over-HTTP endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = 30,
        max_retries: int = 0,
        verify_ssl: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API client.

        Args:
            base_url: Endpoint URL (requests go to base_url or base_url/endpoint)
            timeout: Request timeout in seconds
            max_retries: Retry attempts for transient HTTP errors. The dashboard
                         leaves retry policy to the caller, so this defaults to 0.
            verify_ssl: Whether to verify SSL certificates
            user_agent: User-Agent header sent with every request
            logger: Logger instance
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.logger = logger or logging.getLogger(__name__)

        self.session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": user_agent
        })

    def _make_request(
        self,
        method: str,
        endpoint: str = "",
        **kwargs
    ) -> requests.Response:
        """
        Make HTTP request to the endpoint.

        Args:
            method: HTTP method
            endpoint: Optional path appended to the base URL
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            FetchError: On transport failure or non-2xx status
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}" if endpoint else self.base_url
        kwargs.setdefault("verify", self.verify_ssl)

        self.logger.debug(f"{method} {url} params={kwargs.get('params')}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                timeout=self.timeout,
                **kwargs
            )
            response.raise_for_status()
            return response

        except requests.exceptions.RequestException as e:
            self.logger.error(f"API request failed: {method} {url} - {e}")
            raise FetchError(f"Request to {url} failed: {e}") from e

    def get(self, endpoint: str = "", params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Make GET request and decode the JSON body.

        Args:
            endpoint: Optional path appended to the base URL
            params: Query parameters

        Returns:
            Decoded JSON response

        Raises:
            FetchError: On transport failure or an undecodable body
        """
        response = self._make_request("GET", endpoint, params=params)
        try:
            return response.json()
        except ValueError as e:
            self.logger.error(f"Invalid JSON from {response.url}: {e}")
            raise FetchError(f"Invalid JSON response from {self.base_url}") from e

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
