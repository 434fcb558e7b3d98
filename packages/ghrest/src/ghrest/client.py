"""GitHub API client."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from .auth import AuthToken, mask_token
from .errors import ApiError, ParseError, TransportError
from .models import (
    CreateBlobRequest,
    CreateCommitRequest,
    CreatePullRequestRequest,
    CreateRefRequest,
    CreateTreeRequest,
    TreeEntry,
    UpdateRefRequest,
)

logger = logging.getLogger(__name__)

USER_AGENT = "ghrest-client"
DEFAULT_TIMEOUT = 30.0  # seconds
UNKNOWN_ERROR = "Unknown error"


def _error_message(response: httpx.Response) -> str:
    """Extract `message` from an error body."""
    try:
        data = response.json()
    except ValueError:
        return UNKNOWN_ERROR
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return UNKNOWN_ERROR


def _repo_path(owner: str, repo: str) -> str:
    """Encoded /repos/{owner}/{repo} prefix."""
    return f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"


def _branch(name: str) -> str:
    """Encode a branch name, keeping slashes as path separators."""
    return quote(name, safe="/")


def _extract(data: Any, *keys: str) -> str:
    """Walk nested keys and return the string found there."""
    value = data
    for key in keys:
        if not isinstance(value, dict) or key not in value:
            raise ParseError(f"Failed to extract {'.'.join(keys)} from response")
        value = value[key]
    if not isinstance(value, str):
        raise ParseError(f"Field {'.'.join(keys)} is not a string")
    return value


class GitHubClient:
    """GitHub REST API client for refs, git objects and pull requests."""

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        token: str | AuthToken,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub personal access token
            base_url: Custom base URL (defaults to GitHub API)
            timeout: Default request timeout in seconds
            transport: Custom httpx transport
        """
        self.token = token if isinstance(token, AuthToken) else AuthToken(token)
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self._http = httpx.Client(
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
            transport=transport,
        )
        logger.info(
            "GitHub client ready, base_url=%s, token=%s",
            self.base_url,
            mask_token(self.token.as_str()),
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> "GitHubClient":
        """Create a client with the token from GITHUB_TOKEN."""
        return cls(AuthToken.from_env(), **kwargs)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ============ Verb layer ============

    def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send an authenticated request and return the raw response."""
        if not path.startswith("/"):
            raise ValueError(f"Path must start with '/': {path!r}")
        url = f"{self.base_url}{path}"
        logger.info("Request: %s %s", method, url)
        try:
            response = self._http.request(
                method,
                url,
                headers=self.token.headers(),
                json=json,
                timeout=httpx.USE_CLIENT_DEFAULT if timeout is None else timeout,
            )
        except httpx.HTTPError as e:
            logger.error("Request %s %s failed: %s", method, path, e)
            raise TransportError.from_httpx(e) from e

        if response.is_success:
            logger.info("Response: %s %s (status=%d)", method, path, response.status_code)
        else:
            logger.warning("Request failed: %s %s (status=%d)", method, path, response.status_code)
        return response

    def get(self, path: str, *, timeout: float | None = None) -> httpx.Response:
        return self._request("GET", path, timeout=timeout)

    def post(
        self, path: str, json: dict[str, Any], *, timeout: float | None = None
    ) -> httpx.Response:
        return self._request("POST", path, json=json, timeout=timeout)

    def patch(
        self, path: str, json: dict[str, Any], *, timeout: float | None = None
    ) -> httpx.Response:
        return self._request("PATCH", path, json=json, timeout=timeout)

    def list_user_repos(self, *, timeout: float | None = None) -> httpx.Response:
        """List repositories of the authenticated user (raw response)."""
        return self.get("/user/repos", timeout=timeout)

    # ============ Response handling ============

    @staticmethod
    def _check(response: httpx.Response) -> None:
        """Raise ApiError for a non-2xx response."""
        if not response.is_success:
            raise ApiError(response.status_code, _error_message(response))

    @classmethod
    def _json(cls, response: httpx.Response) -> Any:
        cls._check(response)
        try:
            return response.json()
        except ValueError as e:
            raise ParseError(f"Failed to parse response: {e}") from e

    # ============ Domain methods ============

    def get_authenticated_user(self, *, timeout: float | None = None) -> dict[str, Any]:
        """Get the user the token belongs to."""
        data = self._json(self.get("/user", timeout=timeout))
        if not isinstance(data, dict):
            raise ParseError("Expected a JSON object for /user")
        return data

    def list_repositories(self, *, timeout: float | None = None) -> list[dict[str, Any]]:
        """List repositories of the authenticated user (first page, decoded)."""
        data = self._json(self.list_user_repos(timeout=timeout))
        if not isinstance(data, list):
            raise ParseError("Expected a JSON array for /user/repos")
        return data

    def get_base_branch_sha(
        self, owner: str, repo: str, branch: str, *, timeout: float | None = None
    ) -> str:
        """
        Get the latest commit SHA of a branch.

        Args:
            owner: Repository owner
            repo: Repository name
            branch: Branch name

        Returns:
            Commit SHA the branch points at
        """
        path = f"{_repo_path(owner, repo)}/git/ref/heads/{_branch(branch)}"
        sha = _extract(self._json(self.get(path, timeout=timeout)), "object", "sha")
        logger.debug("Branch %s/%s:%s at %s", owner, repo, branch, sha)
        return sha

    def create_branch(
        self,
        owner: str,
        repo: str,
        new_branch: str,
        base_sha: str,
        *,
        timeout: float | None = None,
    ) -> None:
        """Create a new branch pointing at base_sha."""
        path = f"{_repo_path(owner, repo)}/git/refs"
        body = CreateRefRequest.for_branch(new_branch, base_sha)
        self._check(self.post(path, body.model_dump(), timeout=timeout))
        logger.info("Created branch %s/%s:%s", owner, repo, new_branch)

    def get_latest_tree_sha(
        self, owner: str, repo: str, commit_sha: str, *, timeout: float | None = None
    ) -> str:
        """Get the tree SHA of a commit."""
        path = f"{_repo_path(owner, repo)}/git/commits/{quote(commit_sha, safe='')}"
        return _extract(self._json(self.get(path, timeout=timeout)), "tree", "sha")

    def create_blob(
        self, owner: str, repo: str, content: str, *, timeout: float | None = None
    ) -> str:
        """
        Create a blob from UTF-8 text.

        Returns:
            Blob SHA
        """
        path = f"{_repo_path(owner, repo)}/git/blobs"
        body = CreateBlobRequest(content=content)
        sha = _extract(self._json(self.post(path, body.model_dump(), timeout=timeout)), "sha")
        logger.debug("Created blob %s (%d chars)", sha, len(content))
        return sha

    def create_tree(
        self,
        owner: str,
        repo: str,
        base_tree: str,
        file_path: str,
        blob_sha: str,
        *,
        timeout: float | None = None,
    ) -> str:
        """
        Create a tree on top of base_tree with one file entry.

        Args:
            owner: Repository owner
            repo: Repository name
            base_tree: SHA of the tree to extend
            file_path: Path of the file within the repository
            blob_sha: SHA of the blob holding the file content

        Returns:
            New tree SHA
        """
        path = f"{_repo_path(owner, repo)}/git/trees"
        body = CreateTreeRequest(
            base_tree=base_tree,
            tree=[TreeEntry(path=file_path, sha=blob_sha)],
        )
        return _extract(self._json(self.post(path, body.model_dump(), timeout=timeout)), "sha")

    def create_commit(
        self,
        owner: str,
        repo: str,
        message: str,
        tree_sha: str,
        parent_sha: str,
        *,
        timeout: float | None = None,
    ) -> str:
        """Create a commit with a single parent. Returns the commit SHA."""
        path = f"{_repo_path(owner, repo)}/git/commits"
        body = CreateCommitRequest(message=message, tree=tree_sha, parents=[parent_sha])
        return _extract(self._json(self.post(path, body.model_dump(), timeout=timeout)), "sha")

    def update_branch_reference(
        self,
        owner: str,
        repo: str,
        branch: str,
        commit_sha: str,
        *,
        timeout: float | None = None,
    ) -> None:
        """Fast-forward a branch to commit_sha (never forced)."""
        path = f"{_repo_path(owner, repo)}/git/refs/heads/{_branch(branch)}"
        body = UpdateRefRequest(sha=commit_sha)
        self._check(self.patch(path, body.model_dump(), timeout=timeout))
        logger.info("Updated %s/%s:%s to %s", owner, repo, branch, commit_sha)

    def create_pull_request(
        self,
        owner: str,
        repo: str,
        base: str,
        head: str,
        title: str,
        body: str,
        *,
        timeout: float | None = None,
    ) -> None:
        """
        Open a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            base: Branch to merge into
            head: Branch to merge from
            title: Pull request title
            body: Pull request description
        """
        path = f"{_repo_path(owner, repo)}/pulls"
        request = CreatePullRequestRequest(title=title, body=body, base=base, head=head)
        self._check(self.post(path, request.model_dump(), timeout=timeout))
        logger.info("Opened pull request %s/%s: %s -> %s", owner, repo, head, base)
