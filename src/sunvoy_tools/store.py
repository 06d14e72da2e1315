"""Persisted session cookie for the Sunvoy user export."""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from .session import USER_AGENT, SunvoyError, SunvoySession

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """The raw Set-Cookie string that stands for a logged-in browser."""

    cookies: str


class CredentialStore:
    """Reads, writes and validates the single stored Session."""

    def __init__(self, session: SunvoySession, path: Path | None = None):
        self.session = session
        self.path = Path(path) if path is not None else session.config.credentials_file

    def load(self) -> Session | None:
        """Return the stored Session, or None if the file is missing or malformed."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug(f"Credentials file {self.path} not found")
            return None
        except (OSError, ValueError) as e:
            logger.debug(f"Ignoring unreadable credentials file {self.path}: {e}")
            return None
        cookies = data.get("cookies") if isinstance(data, dict) else None
        if not isinstance(cookies, str) or not cookies:
            logger.debug(f"Credentials file {self.path} holds no cookies")
            return None
        return Session(cookies)

    def save(self, stored: Session) -> None:
        """Overwrite the credentials file, creating its directory as needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(asdict(stored), indent=2), encoding="utf-8")
        logger.debug(f"Saved credentials to {self.path}")

    def probe(self, cookies: str) -> bool:
        """Check whether cookies still open the tokens page (status exactly 200)."""
        config = self.session.config
        headers = {"cookie": cookies, "user-agent": USER_AGENT}
        try:
            response = self.session.fetch("GET", config.tokens_url, headers=headers)
        except SunvoyError as e:
            logger.info(f"Credential validation failed: {e}")
            return False
        if response.status_code != 200:
            logger.info(
                f"Credential validation failed: HTTP error! status: "
                f"{response.status_code}"
            )
            return False
        logger.info("Credentials are valid")
        return True
