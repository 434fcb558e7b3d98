"""GitHub token handling."""

import logging
import os

from dotenv import find_dotenv, load_dotenv

from .errors import MissingTokenError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"
ACCEPT_HEADER = "application/vnd.github.v3+json"


def mask_token(token: str) -> str:
    """Return a short, non-sensitive rendering of a token."""
    return f"{token[:4]}***" if len(token) > 8 else "***"


def build_auth_headers(token: str) -> dict[str, str]:
    """
    Build the headers every API call needs.

    Args:
        token: GitHub personal access token

    Returns:
        Authorization and Accept headers
    """
    return {
        "Authorization": f"token {token}",
        "Accept": ACCEPT_HEADER,
    }


class AuthToken:
    """Immutable GitHub bearer token."""

    __slots__ = ("_token",)

    def __init__(self, token: str):
        if not token:
            raise ValueError("GitHub token must not be empty")
        self._token = token

    @classmethod
    def from_env(cls, env_var: str = DEFAULT_TOKEN_ENV, load_dotfile: bool = True) -> "AuthToken":
        """
        Load token from the environment.

        Args:
            env_var: Environment variable holding the token
            load_dotfile: Read a local .env first (existing variables win)

        Returns:
            AuthToken with the exact variable value

        Raises:
            MissingTokenError: If the variable is unset or empty
        """
        if load_dotfile:
            load_dotenv(find_dotenv(usecwd=True), override=False)
        logger.info("Loading GitHub token from environment")
        token = os.environ.get(env_var)
        if not token:
            logger.error("Environment variable %s is not set", env_var)
            raise MissingTokenError(env_var)
        logger.debug("Token loaded: %s", mask_token(token))
        return cls(token)

    def as_str(self) -> str:
        return self._token

    def headers(self) -> dict[str, str]:
        return build_auth_headers(self._token)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AuthToken):
            return NotImplemented
        return self._token == other._token

    def __hash__(self) -> int:
        return hash(self._token)

    def __repr__(self) -> str:
        return f"AuthToken({mask_token(self._token)!r})"
