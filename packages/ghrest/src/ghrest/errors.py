"""GitHub API error types."""

import httpx


class GitHubError(Exception):
    """Base error for all GitHub client failures."""

    @property
    def status(self) -> int | None:
        """HTTP status carried by the error, if any."""
        return None


class TransportError(GitHubError):
    """No response was obtained (connection, DNS, TLS, timeout).

    Non-2xx responses are ApiError, so `status` is always None here.
    """

    @classmethod
    def from_httpx(cls, exc: httpx.HTTPError) -> "TransportError":
        return cls(f"HTTP request failed: {exc}")


class ApiError(GitHubError):
    """Non-2xx response from the API."""

    def __init__(self, status: int, message: str):
        super().__init__(f"Request failed with status {status}: {message}")
        self._status = status
        self.message = message

    @property
    def status(self) -> int:
        return self._status


class ParseError(GitHubError):
    """Successful response missing the expected field."""


class MissingTokenError(GitHubError):
    """Token environment variable is not set."""

    def __init__(self, env_var: str):
        super().__init__(f"Environment variable {env_var} is not set")
        self.env_var = env_var
