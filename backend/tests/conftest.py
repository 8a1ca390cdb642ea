"""Shared fixtures: a fake language source, a fake clock and a test app."""

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from langchart.cache import InMemoryResponseCache
from langchart.config import Settings
from langchart.github_client import Repository
from langchart.main import create_app


class FakeLanguageSource:
    """In-memory stand-in for GitHubLanguageSource that counts upstream calls."""

    def __init__(
        self,
        repos: Optional[List[Repository]] = None,
        languages: Optional[Dict[str, Dict[str, int]]] = None,
        error: Optional[Exception] = None,
    ):
        self.repos = repos or []
        self.languages = languages or {}
        self.error = error
        self.list_calls = 0
        self.language_calls: List[str] = []

    def list_owned_repositories(self) -> List[Repository]:
        self.list_calls += 1
        if self.error is not None:
            raise self.error
        return list(self.repos)

    def get_repository_languages(self, owner: str, name: str) -> Dict[str, int]:
        self.language_calls.append(f"{owner}/{name}")
        return dict(self.languages.get(f"{owner}/{name}", {}))


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def repo(name: str, fork: bool = False, archived: bool = False, owner: str = "octocat") -> Repository:
    return Repository(owner_login=owner, name=name, fork=fork, archived=archived)


@pytest.fixture
def source() -> FakeLanguageSource:
    return FakeLanguageSource(
        repos=[repo("web"), repo("tools")],
        languages={
            "octocat/web": {"JavaScript": 600},
            "octocat/tools": {"JavaScript": 200, "Python": 200},
        },
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(github_token="test-token", cache_max_age=86400)


@pytest.fixture
def cache(clock, settings) -> InMemoryResponseCache:
    return InMemoryResponseCache(max_age=settings.cache_max_age, clock=clock)


@pytest.fixture
def client(settings, cache, source) -> TestClient:
    app = create_app(settings=settings, cache=cache, source_factory=lambda _settings: source)
    return TestClient(app)
