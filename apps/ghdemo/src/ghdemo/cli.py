"""CLI exercising the ghrest client workflows."""

import logging
import time
from pathlib import Path
from typing import NoReturn

import click
from dotenv import find_dotenv, load_dotenv

from ghrest import GitHubClient, GitHubError, commit_file

logger = logging.getLogger(__name__)

DEFAULT_BASE = "main"
STATUS_HINTS = {
    401: "The token is invalid or expired",
    403: "The token may be invalid or lack the required permissions",
    404: "Repository, branch or object not found (or not visible to this token)",
    422: "Validation failed: the branch may already exist or the request conflicts",
}


def setup_logging(verbose: int) -> None:
    """Setup logging."""
    level = logging.DEBUG if verbose >= 2 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def status_hint(status: int | None) -> str | None:
    """Advisory message for a failed call's status."""
    if status is None:
        return None
    return STATUS_HINTS.get(status, f"API error: status code {status}")


def fail(action: str, error: GitHubError) -> NoReturn:
    """Report a client error and exit non-zero."""
    click.echo(f"✗ Failed to {action}: {error}", err=True)
    hint = status_hint(error.status)
    if hint:
        click.echo(f"  {hint}", err=True)
    raise SystemExit(1)


def get_client(ctx: click.Context) -> GitHubClient:
    """Build the client on first use."""
    obj = ctx.find_root().obj
    if obj.get("client") is None:
        if not obj["token"]:
            click.echo("Error: GITHUB_TOKEN required", err=True)
            click.echo("Set in .env or: export GITHUB_TOKEN=ghp_xxx", err=True)
            raise SystemExit(1)
        client = GitHubClient(obj["token"], base_url=obj["base_url"], timeout=obj["timeout"])
        ctx.find_root().call_on_close(client.close)
        obj["client"] = client
        logger.debug("Client created for %s", obj["base_url"])
    return obj["client"]


# ============ CLI Group ============

@click.group()
@click.option("--token", envvar="GITHUB_TOKEN", help="GitHub token")
@click.option("--base-url", default=GitHubClient.BASE_URL, show_default=True, help="API base URL")
@click.option("--timeout", type=float, default=30.0, show_default=True, help="Request timeout (s)")
@click.option("-v", "--verbose", count=True, help="Verbosity (-v, -vv)")
@click.pass_context
def cli(ctx: click.Context, token: str | None, base_url: str, timeout: float, verbose: int) -> None:
    """GitHub REST client examples."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj.update(token=token, base_url=base_url, timeout=timeout, client=None)


# ============ Commands ============

@cli.command()
@click.option("-n", "--limit", type=int, default=5, show_default=True, help="Repositories to show")
@click.pass_context
def repos(ctx, limit):
    """Show the authenticated user and their repositories."""
    client = get_client(ctx)

    try:
        user = client.get_authenticated_user()
    except GitHubError as e:
        fail("get user info", e)
    click.echo(f"✓ Login: {user.get('login')}")
    click.echo(f"  Name: {user.get('name')}")

    try:
        items = client.list_repositories()
    except GitHubError as e:
        fail("list repositories", e)

    click.echo(f"\nRepositories ({len(items)}):")
    for item in items[:limit]:
        click.echo(f"  - {item.get('name')} ({item.get('html_url')})")
    if len(items) > limit:
        click.echo(f"  ... and {len(items) - limit} more")


@cli.command()
@click.argument("owner")
@click.argument("repo")
@click.argument("new_branch", required=False)
@click.option("-b", "--base", default=DEFAULT_BASE, show_default=True, help="Branch to fork from")
@click.pass_context
def branch(ctx, owner, repo, new_branch, base):
    """Create NEW_BRANCH from the tip of --base."""
    client = get_client(ctx)
    new_branch = new_branch or f"test-branch-{int(time.time())}"

    click.echo(f"Getting SHA of {base}...")
    try:
        base_sha = client.get_base_branch_sha(owner, repo, base)
    except GitHubError as e:
        fail("get base SHA", e)
    click.echo(f"✓ Got base SHA: {base_sha[:8]}...")

    click.echo(f"Creating branch {new_branch}...")
    try:
        client.create_branch(owner, repo, new_branch, base_sha)
    except GitHubError as e:
        fail("create branch", e)
    click.echo(f"✓ Created branch: {new_branch}")


@cli.command()
@click.argument("owner")
@click.argument("repo")
@click.argument("path")
@click.option("-b", "--branch", "branch_name", default=DEFAULT_BASE, show_default=True)
@click.option("-m", "--message", help="Commit message (default: 'Update PATH')")
@click.option("-c", "--content", help="File content")
@click.option(
    "-f", "--file", "source",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read file content from a local file",
)
@click.pass_context
def commit(ctx, owner, repo, path, branch_name, message, content, source):
    """Commit PATH with new content onto --branch."""
    if (content is None) == (source is None):
        raise click.UsageError("Pass exactly one of --content or --file")
    if source is not None:
        try:
            content = source.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise click.BadParameter(
                f"{source} is not valid UTF-8 ({e.reason})", param_hint="--file"
            ) from e

    client = get_client(ctx)
    try:
        result = commit_file(
            client, owner, repo, branch_name, path, content, message or f"Update {path}"
        )
    except GitHubError as e:
        fail("create commit", e)

    click.echo(f"✓ Created commit: {result.commit_sha}")
    click.echo(f"  Parent: {result.base_commit_sha}")
    click.echo(f"  Tree:   {result.tree_sha}")
    click.echo(f"  Blob:   {result.blob_sha}")


@cli.command()
@click.argument("owner")
@click.argument("repo")
@click.argument("head")
@click.option("-b", "--base", default=DEFAULT_BASE, show_default=True, help="Branch to merge into")
@click.option("-t", "--title", required=True)
@click.option("--body", default="", help="Pull request description")
@click.pass_context
def pr(ctx, owner, repo, head, base, title, body):
    """Open a pull request from HEAD into --base."""
    client = get_client(ctx)

    click.echo("Creating pull request...")
    try:
        client.create_pull_request(owner, repo, base, head, title, body)
    except GitHubError as e:
        fail("create pull request", e)

    click.echo("✓ Pull request created")
    click.echo(f"  Base:  {base}")
    click.echo(f"  Head:  {head}")
    click.echo(f"  Title: {title}")


def main() -> None:
    load_dotenv(find_dotenv(usecwd=True))
    cli()


if __name__ == "__main__":
    main()
