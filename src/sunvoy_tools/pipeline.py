"""Sunvoy user export: log in, fetch users and write them to disk."""

import json
import logging
from pathlib import Path

from .auth import AuthFlow
from .fetchers import ResourceFetcher, User
from .result import attempt, value_or
from .session import SunvoySession
from .store import CredentialStore

logger = logging.getLogger(__name__)


class UserExporter:
    """Runs the whole export against one SunvoySession."""

    def __init__(
        self,
        session: SunvoySession,
        auth: AuthFlow | None = None,
        fetcher: ResourceFetcher | None = None,
    ):
        self.session = session
        self.config = session.config
        self.auth = auth or AuthFlow(session, CredentialStore(session))
        self.fetcher = fetcher or ResourceFetcher(session)

    def export(self) -> list[User]:
        """Fetch everything and write the output file.

        Credential failures propagate; fetch failures degrade to empty values.
        """
        cookies = self.auth.get_credentials()

        users_result = attempt("users fetch", self.fetcher.fetch_users, cookies)
        users = value_or(users_result, [])
        logger.info(f"Users API result length: {len(users)}")

        current_result = attempt(
            "current user fetch", self.fetcher.fetch_current_user, cookies
        )
        current_user = value_or(current_result, {})

        all_users = merge_users(users, current_user)
        check_count(all_users, self.config.expected_user_count)
        write_users(all_users, self.config.output_file)
        return all_users


def merge_users(users: list[User], current_user: User) -> list[User]:
    """Append the current user to the list, dropping empty or non-mapping entries."""
    combined = list(users) + [current_user]
    return [user for user in combined if isinstance(user, dict) and user]


def check_count(users: list[User], expected: int) -> None:
    """Warn when the number of users differs from expected (0 disables)."""
    if expected and len(users) != expected:
        logger.warning(f"Expected {expected} users, got {len(users)}")


def write_users(users: list[User], path: Path) -> None:
    """Write users as JSON indented by two spaces."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(users, indent=2), encoding="utf-8")
    logger.info(f"Data saved to {path}")
