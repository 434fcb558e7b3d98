"""Shared fixtures for ghrest tests."""

import json

import pytest

from ghrest import GitHubClient

API = "https://api.github.com"
TOKEN = "test_token"


@pytest.fixture
def client():
    with GitHubClient(TOKEN) as c:
        yield c


def request_json(request) -> dict:
    """Decode the JSON body of a captured request."""
    return json.loads(request.read())
