"""Sunvoy tools package for exporting users from the Sunvoy challenge site."""

from importlib.metadata import PackageNotFoundError, version

from .auth import AuthFlow, NonceContext
from .config import Config, resolve_config
from .fetchers import ResourceFetcher, Tokens
from .html import HtmlExtractor, SoupExtractor
from .pipeline import UserExporter, merge_users, write_users
from .result import Failure, Success, attempt
from .session import (
    HttpError,
    LoginRejected,
    NetworkError,
    NoCookiesReceived,
    NonceNotFound,
    SunvoyError,
    SunvoySession,
    TokenExtractionFailed,
)
from .signing import SignedRequest, sign, verify
from .store import CredentialStore, Session

try:
    __version__ = version("sunvoy-tools")
except PackageNotFoundError:
    # Package is not installed, use fallback version
    __version__ = "UNKNOWN"

__all__ = [
    "AuthFlow",
    "Config",
    "CredentialStore",
    "Failure",
    "HtmlExtractor",
    "HttpError",
    "LoginRejected",
    "NetworkError",
    "NoCookiesReceived",
    "NonceContext",
    "NonceNotFound",
    "ResourceFetcher",
    "Session",
    "SignedRequest",
    "SoupExtractor",
    "Success",
    "SunvoyError",
    "SunvoySession",
    "TokenExtractionFailed",
    "Tokens",
    "UserExporter",
    "attempt",
    "merge_users",
    "resolve_config",
    "sign",
    "verify",
    "write_users",
]
