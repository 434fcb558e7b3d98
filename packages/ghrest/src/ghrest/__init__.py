"""Minimal GitHub REST API client."""

from .auth import AuthToken, build_auth_headers
from .client import GitHubClient
from .commit import commit_file
from .errors import ApiError, GitHubError, MissingTokenError, ParseError, TransportError
from .models import CommitResult

__all__ = [
    "GitHubClient",
    "AuthToken",
    "build_auth_headers",
    "commit_file",
    "CommitResult",
    "GitHubError",
    "TransportError",
    "ApiError",
    "ParseError",
    "MissingTokenError",
]
