"""Single-file commit assembly."""

import logging

from .client import GitHubClient
from .models import CommitResult

logger = logging.getLogger(__name__)


def commit_file(
    client: GitHubClient,
    owner: str,
    repo: str,
    branch: str,
    path: str,
    content: str,
    message: str,
    *,
    timeout: float | None = None,
) -> CommitResult:
    """
    Commit one file onto the tip of a branch.

    Runs: branch SHA -> tree SHA -> blob -> tree -> commit -> ref update.
    A failing step raises immediately. Objects created by earlier steps are
    left unreferenced.

    Args:
        client: Authenticated GitHub client
        owner: Repository owner
        repo: Repository name
        branch: Branch to commit onto
        path: File path within the repository
        content: UTF-8 file content
        message: Commit message

    Returns:
        CommitResult with every SHA produced
    """
    logger.info("Committing %s to %s/%s:%s", path, owner, repo, branch)

    base_commit_sha = client.get_base_branch_sha(owner, repo, branch, timeout=timeout)
    logger.info("[1/6] base commit %s", base_commit_sha)

    base_tree_sha = client.get_latest_tree_sha(owner, repo, base_commit_sha, timeout=timeout)
    logger.info("[2/6] base tree %s", base_tree_sha)

    blob_sha = client.create_blob(owner, repo, content, timeout=timeout)
    logger.info("[3/6] blob %s", blob_sha)

    tree_sha = client.create_tree(owner, repo, base_tree_sha, path, blob_sha, timeout=timeout)
    logger.info("[4/6] tree %s", tree_sha)

    commit_sha = client.create_commit(
        owner, repo, message, tree_sha, base_commit_sha, timeout=timeout
    )
    logger.info("[5/6] commit %s", commit_sha)

    client.update_branch_reference(owner, repo, branch, commit_sha, timeout=timeout)
    logger.info("[6/6] %s now at %s", branch, commit_sha)

    return CommitResult(
        base_commit_sha=base_commit_sha,
        base_tree_sha=base_tree_sha,
        blob_sha=blob_sha,
        tree_sha=tree_sha,
        commit_sha=commit_sha,
    )
