"""Tests for single-file commit assembly."""

import pytest

from ghrest import ApiError, CommitResult, commit_file

from .conftest import API, request_json

REPO = f"{API}/repos/owner/repo"
S0 = "s0" * 20
T0 = "t0" * 20
B1 = "b1" * 20
T1 = "t1" * 20
C1 = "c1" * 20


def mock_until(httpx_mock, steps: int) -> None:
    """Register the first `steps` successful responses of the sequence."""
    responses = [
        dict(method="GET", url=f"{REPO}/git/ref/heads/main", json={"object": {"sha": S0}}),
        dict(method="GET", url=f"{REPO}/git/commits/{S0}", json={"tree": {"sha": T0}}),
        dict(method="POST", url=f"{REPO}/git/blobs", status_code=201, json={"sha": B1}),
        dict(method="POST", url=f"{REPO}/git/trees", status_code=201, json={"sha": T1}),
        dict(method="POST", url=f"{REPO}/git/commits", status_code=201, json={"sha": C1}),
        dict(method="PATCH", url=f"{REPO}/git/refs/heads/main", json={"object": {"sha": C1}}),
    ]
    for response in responses[:steps]:
        httpx_mock.add_response(**response)


class TestCommitFile:
    """commit_file sequencing."""

    def test_chains_each_step(self, client, httpx_mock):
        mock_until(httpx_mock, 6)

        result = commit_file(
            client, "owner", "repo", "main", "example/test.txt", "Hello, World!", "Add test.txt"
        )

        assert result == CommitResult(
            base_commit_sha=S0,
            base_tree_sha=T0,
            blob_sha=B1,
            tree_sha=T1,
            commit_sha=C1,
        )

        requests = httpx_mock.get_requests()
        assert [(r.method, r.url.path) for r in requests] == [
            ("GET", "/repos/owner/repo/git/ref/heads/main"),
            ("GET", f"/repos/owner/repo/git/commits/{S0}"),
            ("POST", "/repos/owner/repo/git/blobs"),
            ("POST", "/repos/owner/repo/git/trees"),
            ("POST", "/repos/owner/repo/git/commits"),
            ("PATCH", "/repos/owner/repo/git/refs/heads/main"),
        ]
        assert request_json(requests[2]) == {"content": "Hello, World!", "encoding": "utf-8"}
        tree_body = request_json(requests[3])
        assert tree_body["base_tree"] == T0
        assert tree_body["tree"][0]["sha"] == B1
        assert tree_body["tree"][0]["path"] == "example/test.txt"
        assert request_json(requests[4]) == {
            "message": "Add test.txt",
            "tree": T1,
            "parents": [S0],
        }
        assert request_json(requests[5]) == {"sha": C1, "force": False}

    def test_failure_stops_sequence_without_rollback(self, client, httpx_mock):
        mock_until(httpx_mock, 4)
        httpx_mock.add_response(
            method="POST",
            url=f"{REPO}/git/commits",
            status_code=403,
            json={"message": "Resource not accessible by integration"},
        )

        with pytest.raises(ApiError) as exc_info:
            commit_file(client, "owner", "repo", "main", "a.txt", "a", "msg")

        assert exc_info.value.status == 403
        methods = [r.method for r in httpx_mock.get_requests()]
        assert methods == ["GET", "GET", "POST", "POST", "POST"]
        assert "DELETE" not in methods
