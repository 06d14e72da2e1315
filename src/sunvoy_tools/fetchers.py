"""Fetchers for the user list and the logged-in user's own record."""

import json
import logging
from dataclasses import asdict, dataclass, fields

from requests import Response

from .html import HtmlExtractor, SoupExtractor
from .session import (
    FORM_CONTENT_TYPE,
    SunvoyError,
    SunvoySession,
    TokenExtractionFailed,
)
from .signing import sign

logger = logging.getLogger(__name__)

User = dict


class InvalidJson(SunvoyError):
    """A response that should carry JSON did not."""


@dataclass
class Tokens:
    """Hidden form fields scraped from the settings tokens page."""

    access_token: str
    userId: str
    openId: str
    operateId: str
    apiuser: str
    language: str

    def as_params(self) -> dict[str, str]:
        return asdict(self)


TOKEN_FIELDS = tuple(f.name for f in fields(Tokens))


def parse_json(response: Response, what: str):
    try:
        return response.json()
    except ValueError as e:
        logger.debug(f"{what} response data: {response.text}")
        raise InvalidJson(f"{what} response is not valid JSON: {e}", response) from e


class ResourceFetcher:
    """Fetches Sunvoy resources with an already valid session cookie."""

    def __init__(self, session: SunvoySession, extractor: HtmlExtractor | None = None):
        self.session = session
        self.extractor = extractor or SoupExtractor()

    @property
    def config(self):
        return self.session.config

    def fetch_tokens(self, cookies: str) -> Tokens:
        """Scrape the six API tokens from the settings tokens page.

        Raises:
            TokenExtractionFailed: If access_token or userId is empty
        """
        headers = self.session.xhr_headers(cookies, f"{self.config.base_url}/settings")
        response = self.session.fetch("GET", self.config.tokens_url, headers=headers)
        html = response.text
        values = {}
        for name in TOKEN_FIELDS:
            value = self.extractor.extract_attribute(html, f"#{name}", "value")
            values[name] = value or ""
        tokens = Tokens(**values)
        logger.debug(f"Tokens extracted: {tokens}")
        if not tokens.access_token or not tokens.userId:
            logger.debug(f"Tokens response HTML: {html}")
            raise TokenExtractionFailed("Failed to extract required tokens", response)
        return tokens

    def fetch_current_user(self, cookies: str) -> User:
        """Fetch the logged-in user through the signed settings API."""
        tokens = self.fetch_tokens(cookies)
        signed = sign(tokens.as_params(), self.config.signing_secret)
        logger.debug(f"Settings form data: {signed.full_payload}")
        headers = self.session.xhr_headers(
            cookies, self.config.base_url, same_site=True
        )
        headers["content-type"] = FORM_CONTENT_TYPE
        response = self.session.fetch(
            "POST", self.config.settings_url, headers=headers, data=signed.full_payload
        )
        user = parse_json(response, "Settings")
        logger.info("Current user fetched successfully")
        logger.debug(f"Current user: {json.dumps(user, indent=2)}")
        return user

    def fetch_users(self, cookies: str) -> list[User]:
        """Fetch the user list, retrying once with GET if the POST fails."""
        headers = self.session.xhr_headers(cookies, f"{self.config.base_url}/list")
        post_headers = dict(headers, **{"content-type": FORM_CONTENT_TYPE})
        try:
            response = self.session.fetch(
                "POST", self.config.users_url, headers=post_headers
            )
            data = parse_json(response, "Users")
            method = "POST"
        except SunvoyError as e:
            logger.error(f"Failed to fetch users (POST): {e}")
            try:
                response = self.session.fetch(
                    "GET", self.config.users_url, headers=headers
                )
                data = parse_json(response, "Users")
                method = "GET"
            except SunvoyError as get_error:
                logger.error(f"Failed to fetch users (GET): {get_error}")
                raise

        logger.info(f"Users fetched successfully ({method})")
        logger.debug(f"Users: {json.dumps(data, indent=2)}")
        if not isinstance(data, list):
            logger.warning("Users API returned no data or invalid format")
            return []
        if not data:
            logger.warning("Users API returned no data or invalid format")
        return data
