"""GitHub API data models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CreateRefRequest(BaseModel):
    """Body for POST /git/refs."""

    ref: str
    sha: str

    @classmethod
    def for_branch(cls, name: str, sha: str) -> "CreateRefRequest":
        return cls(ref=f"refs/heads/{name}", sha=sha)


class CreateBlobRequest(BaseModel):
    """Body for POST /git/blobs."""

    content: str
    encoding: Literal["utf-8", "base64"] = "utf-8"


class TreeEntry(BaseModel):
    """Single entry of a tree."""

    path: str
    mode: str = "100644"  # regular file
    type: Literal["blob", "tree", "commit"] = "blob"
    sha: str


class CreateTreeRequest(BaseModel):
    """Body for POST /git/trees."""

    base_tree: str
    tree: list[TreeEntry] = Field(default_factory=list)


class CreateCommitRequest(BaseModel):
    """Body for POST /git/commits."""

    message: str
    tree: str
    parents: list[str] = Field(default_factory=list)


class UpdateRefRequest(BaseModel):
    """Body for PATCH /git/refs/heads/{branch}."""

    sha: str
    force: bool = False


class CreatePullRequestRequest(BaseModel):
    """Body for POST /pulls."""

    title: str
    body: str
    base: str
    head: str


class CommitResult(BaseModel):
    """SHAs produced while assembling a single-file commit."""

    model_config = ConfigDict(frozen=True)

    base_commit_sha: str
    base_tree_sha: str
    blob_sha: str
    tree_sha: str
    commit_sha: str
