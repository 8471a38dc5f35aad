import logging
from typing import Any, Dict, Optional

import requests
from requests.exceptions import JSONDecodeError, RequestException, Timeout

from ..exceptions import (
    UpstreamAuthRejectedError,
    UpstreamMalformedError,
    UpstreamNetworkError,
    UpstreamResponseError,
    UpstreamServerError,
)

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://g91.tcsion.com"
DEFAULT_TIMEOUT = 30


def create_bearer_headers(api_key: str) -> Dict[str, str]:
    """
    Create HTTP headers for bearer-authenticated TCS iON integration endpoints.

    Args:
        api_key (str): The integration API key.

    Returns:
        Dict[str, str]: A dictionary containing the required HTTP headers.
    """
    return {"Authorization": f"Bearer {api_key}", "Accept": "application/json"}


def create_session_headers(session_cookie: str, base_url: str = DEFAULT_BASE_URL) -> Dict[str, str]:
    """
    Create HTTP headers for cookie-authenticated TCS iON search endpoints.

    The search endpoints only answer requests that look like they come from a
    logged-in browser session, so the cookie is sent together with a browser
    user agent and a same-site referer.

    Args:
        session_cookie (str): The raw ``Cookie`` header value of a platform session.
        base_url (str): The platform base URL used as referer.

    Returns:
        Dict[str, str]: A dictionary containing the required HTTP headers.
    """
    return {
        "User-Agent": "Mozilla/5.0",
        "Accept": "application/json, text/plain, */*",
        "Referer": base_url,
        "Cookie": session_cookie,
    }


class TCSionAPI:
    """
    Base class for interacting with the TCS iON learning platform.

    Every call is a single attempt: failures are classified into the
    ``tcsion.exceptions`` hierarchy and raised to the caller, which decides
    whether a failure is fatal.

    Attributes:
        base_url (str): The platform base URL.
        headers (Dict[str, str]): HTTP headers to use for API requests.
        timeout (float): Seconds to wait for the platform before giving up.
        session (requests.Session): HTTP session (connection pool and cookie jar) of this client.
    """

    def __init__(
        self,
        base_url: str,
        headers: Dict[str, str],
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the TCS iON API client.

        Args:
            base_url (str): The platform base URL.
            headers (Dict[str, str]): HTTP headers to use for API requests.
            timeout (float): Request timeout in seconds.
            session (Optional[requests.Session]): Session to reuse; a new one is
                created if omitted.
        """
        self.base_url = base_url.rstrip("/")
        self.headers = headers
        self.timeout = timeout
        self.session = session or requests.Session()

    def get(self, url_suffix: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Perform a GET request to the specified platform endpoint.

        Args:
            url_suffix (str): The endpoint path to append to the base URL.
            params (Optional[Dict[str, Any]]): Query parameters; ``None`` values are dropped.

        Returns:
            Any: The decoded JSON body.

        Raises:
            UpstreamNetworkError: If the request could not be completed.
            UpstreamResponseError: If the platform answered with a non-200 status.
            UpstreamMalformedError: If the body is not valid JSON.
        """
        url = f"{self.base_url}/{url_suffix.lstrip('/')}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = self.session.get(
                url, params=params, headers=self.headers, timeout=self.timeout
            )
        except Timeout as e:
            logger.error(f"Request timed out after {self.timeout}s (URL: {url_suffix[:50]})")
            raise UpstreamNetworkError(f"Timed out requesting {url_suffix}") from e
        except RequestException as e:
            logger.error(f"Connection error: {str(e)} (URL: {url_suffix[:50]})")
            raise UpstreamNetworkError(f"Could not reach {url_suffix}: {e}") from e

        return self._handle_response(response)

    def _handle_response(self, response: requests.Response) -> Any:
        """
        Classify the HTTP response from the platform.

        Args:
            response (requests.Response): The HTTP response object.

        Returns:
            Any: The decoded JSON body of a 200 response.
        """
        status = response.status_code

        if status == 200:
            logger.debug(f"{status} | Successful Request!")
            try:
                return response.json()
            except (JSONDecodeError, ValueError) as e:
                logger.error(f"Response body is not valid JSON: {response.text[:200]}")
                raise UpstreamMalformedError("Response body is not valid JSON") from e

        logger.error(f"Request failed: {status}")
        logger.debug(f"Response text: {response.text[:500]}")

        if status in (401, 403):
            raise UpstreamAuthRejectedError(status, f"Credential rejected with status {status}")
        if status >= 500:
            raise UpstreamServerError(status, f"Server error {status}")
        raise UpstreamResponseError(status)
