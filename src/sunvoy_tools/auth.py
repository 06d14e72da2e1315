"""Login flow producing a Sunvoy session cookie."""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from .html import HtmlExtractor, SoupExtractor
from .session import (
    CLIENT_HINT_HEADERS,
    FORM_CONTENT_TYPE,
    HttpError,
    LoginRejected,
    NoCookiesReceived,
    NonceNotFound,
    SunvoySession,
    dump_response,
)
from .store import CredentialStore, Session

logger = logging.getLogger(__name__)


@dataclass
class NonceContext:
    """Nonce scraped from the login page and any cookie set alongside it."""

    nonce: str
    set_cookie: str | None = None


class AuthFlow:
    """Obtains a valid session cookie, reusing the stored one when it still works."""

    def __init__(
        self,
        session: SunvoySession,
        store: CredentialStore,
        extractor: HtmlExtractor | None = None,
    ):
        self.session = session
        self.store = store
        self.extractor = extractor or SoupExtractor()

    @property
    def config(self):
        return self.session.config

    def fetch_nonce(self) -> NonceContext:
        """GET the login page and scrape its hidden nonce input."""
        response = self.session.fetch(
            "GET", self.config.login_page_url, headers=self.session.navigation_headers()
        )
        html = response.text
        nonce = self.extractor.extract_attribute(html, 'input[name="nonce"]', "value")
        if not nonce:
            logger.debug(f"Login page HTML: {html}")
            raise NonceNotFound("Nonce not found in login page", response)
        logger.debug(f"Nonce extracted: {nonce}")
        set_cookie = response.headers.get("set-cookie")
        logger.debug(f"GET cookies: {set_cookie or 'No cookies'}")
        return NonceContext(nonce, set_cookie)

    def login(self, context: NonceContext) -> str:
        """Submit the login form and store the cookie it sets.

        Redirects are not followed; a 3xx answer means the login was accepted.

        Raises:
            LoginRejected: If the status is outside [200, 400)
            NoCookiesReceived: If the response sets no cookie
        """
        form_data = urlencode(
            {
                "nonce": context.nonce,
                "username": self.config.username,
                "password": self.config.password,
            }
        )
        headers = self.session.navigation_headers(
            context.set_cookie,
            **CLIENT_HINT_HEADERS,
            **{
                "content-type": FORM_CONTENT_TYPE,
                "origin": self.config.base_url,
                "referer": self.config.login_page_url,
                "sec-fetch-dest": "document",
                "sec-fetch-mode": "navigate",
                "sec-fetch-site": "same-origin",
                "sec-fetch-user": "?1",
            },
        )
        try:
            response = self.session.fetch(
                "POST",
                self.config.login_url,
                headers=headers,
                data=form_data,
                follow_redirects=False,
            )
        except HttpError as e:
            logger.error(f"Login failed with status {e.status}: {e.body}")
            raise LoginRejected(e.status, e.body, e.response) from e

        message = self.extractor.body_text(response.text) if response.text else ""
        if message:
            logger.warning(f"Login response body text: {message}")

        cookies = response.headers.get("set-cookie")
        if not cookies:
            dump_response(response)
            raise NoCookiesReceived("No cookies received from login", response)

        self.store.save(Session(cookies))
        logger.info("Login successful")
        logger.debug(f"Session cookies: {cookies}")
        return cookies

    def get_credentials(self) -> str:
        """Return a working cookie string, logging in only when needed."""
        stored = self.store.load()
        if stored is not None and self.store.probe(stored.cookies):
            logger.info("Reusing existing credentials")
            return stored.cookies
        logger.info("No valid credentials found, logging in")
        return self.login(self.fetch_nonce())
