"""SunvoySession class for issuing browser-like requests to Sunvoy."""

import logging

from requests import RequestException, Response, Session

from .config import Config

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/137.0.0.0 Safari/537.36"
)
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

NAVIGATION_HEADERS = {
    "accept": "text/html,application/xhtml+xml,application/xml;q=0.9,"
    "image/avif,image/webp,image/apng,*/*;q=0.8,"
    "application/signed-exchange;v=b3;q=0.7",
    "accept-language": "en-US,en;q=0.9",
    "cache-control": "max-age=0",
    "upgrade-insecure-requests": "1",
    "user-agent": USER_AGENT,
}

CLIENT_HINT_HEADERS = {
    "sec-ch-ua": '"Google Chrome";v="137", "Chromium";v="137", "Not/A)Brand";v="24"',
    "sec-ch-ua-mobile": "?0",
    "sec-ch-ua-platform": '"Windows"',
}

XHR_HEADERS = {
    "accept": "*/*",
    "accept-language": "en-US,en;q=0.9",
    "priority": "u=1, i",
    "user-agent": USER_AGENT,
    **CLIENT_HINT_HEADERS,
    "sec-fetch-dest": "empty",
    "sec-fetch-mode": "cors",
    "referrer-policy": "strict-origin-when-cross-origin",
}


class SunvoyError(Exception):
    """Base class for failures talking to Sunvoy."""

    def __init__(self, message: str, response: Response = None):
        super().__init__(message)
        self.response = response


class NetworkError(SunvoyError):
    """The request never produced a response."""


class HttpError(SunvoyError):
    """The server answered with a status outside the accepted range."""

    def __init__(self, status: int, body: str = "", response: Response = None):
        super().__init__(f"HTTP error! status: {status}", response)
        self.status = status
        self.body = body


class LoginRejected(HttpError):
    """The login form submission was refused."""


class NonceNotFound(SunvoyError):
    """The login page carried no nonce field."""


class NoCookiesReceived(SunvoyError):
    """The login response did not set a session cookie."""


class TokenExtractionFailed(SunvoyError):
    """The tokens page lacked an access token or user id."""


class SunvoySession(Session):
    """Session class that knows the header sets Sunvoy expects.

    Cookies are sent as the raw stored session string in an explicit
    cookie header, which takes precedence over the session's own jar.
    """

    def __init__(self, config: Config):
        super().__init__()
        self.config = config

    def navigation_headers(self, cookies: str | None = None, **extra) -> dict:
        """Headers for top-level page loads and form submissions."""
        headers = dict(NAVIGATION_HEADERS)
        headers.update(extra)
        if cookies:
            headers["cookie"] = cookies
        return headers

    def xhr_headers(self, cookies: str, referer: str, same_site=False) -> dict:
        """Headers for script-initiated requests carrying the session cookie."""
        headers = dict(XHR_HEADERS)
        headers["sec-fetch-site"] = "same-site" if same_site else "same-origin"
        headers["referer"] = referer
        headers["cookie"] = cookies
        return headers

    def fetch(
        self,
        method: str,
        url: str,
        headers: dict | None = None,
        data=None,
        follow_redirects: bool = True,
    ) -> Response:
        """Send a request and check its status.

        With ``follow_redirects`` off, redirects are returned rather than
        followed and any status in [200, 400) counts as success; otherwise
        only 2xx does.

        Raises:
            NetworkError: If the request fails before a response arrives
            HttpError: If the status is outside the accepted range
        """
        try:
            response = self.request(
                method,
                url,
                headers=headers,
                data=data,
                allow_redirects=follow_redirects,
            )
        except RequestException as e:
            logger.error(f"Failed to {method} {url}: {e}")
            raise NetworkError(f"{method} {url} failed: {e}") from e

        upper = 400 if not follow_redirects else 300
        if not 200 <= response.status_code < upper:
            logger.error(f"{method} {url} returned status {response.status_code}")
            logger.debug(f"Response data: {response.text}")
            raise HttpError(response.status_code, response.text, response)
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response


def dump_response(response: Response) -> None:
    """Log full response details including headers."""
    logger.info(f"Response URL: {response.url}")
    logger.info(f"Status: {response.status_code} {response.reason}")
    logger.debug("Response headers:")
    for k, v in response.headers.items():
        logger.debug(f"  {k}: {v}")
