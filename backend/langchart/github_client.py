from typing import Callable, Dict, List, Optional, TypeVar

import requests
from github import Auth, Github
from github.GithubException import BadCredentialsException, GithubException
from pydantic import BaseModel

from .exceptions import UpstreamAuthError, UpstreamNetworkError
from .logging import get_logger, mask_sensitive_data

logger = get_logger("github")

PAGE_SIZE = 100

T = TypeVar("T")


class Repository(BaseModel):
    owner_login: str
    name: str
    fork: bool = False
    archived: bool = False


def gh_client(token: str, timeout: int = 10) -> Github:
    # Configure a network timeout to avoid hanging requests
    return Github(auth=Auth.Token(token), timeout=timeout, per_page=PAGE_SIZE)


class GitHubLanguageSource:
    """Lists the token owner's repositories and their language byte counts.

    Pagination is left to PyGithub's PaginatedList. The client is built on
    first use, so a missing token only fails once data is actually requested.
    """

    def __init__(self, token: Optional[str], timeout: int = 10):
        self._token = token
        self._timeout = timeout
        self._gh: Optional[Github] = None

    def _client(self) -> Github:
        if self._gh is None:
            if not self._token:
                raise UpstreamAuthError("GITHUB_TOKEN is not configured")
            self._gh = gh_client(self._token, timeout=self._timeout)
        return self._gh

    def _call(self, what: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except BadCredentialsException as ge:
            raise UpstreamAuthError(f"GitHub rejected the token while {what}") from ge
        except GithubException as ge:
            if ge.status == 401:
                raise UpstreamAuthError(f"GitHub rejected the token while {what}") from ge
            detail = ge.data.get("message") if isinstance(ge.data, dict) else str(ge)
            raise UpstreamNetworkError(
                f"GitHub API error while {what}: {mask_sensitive_data(str(detail))}",
                status=ge.status,
            ) from ge
        except requests.exceptions.RequestException as e:
            raise UpstreamNetworkError(
                f"Error reaching api.github.com while {what}: {mask_sensitive_data(str(e))}"
            ) from e

    def list_owned_repositories(self) -> List[Repository]:
        def fetch() -> List[Repository]:
            user = self._client().get_user()
            return [
                Repository(
                    owner_login=repo.owner.login,
                    name=repo.name,
                    fork=bool(repo.fork),
                    archived=bool(repo.archived),
                )
                for repo in user.get_repos(affiliation="owner")
            ]

        repos = self._call("listing repositories", fetch)
        logger.debug("Listed %d owned repositories", len(repos))
        return repos

    def get_repository_languages(self, owner: str, name: str) -> Dict[str, int]:
        def fetch() -> Dict[str, int]:
            repo = self._client().get_repo(f"{owner}/{name}", lazy=True)
            return repo.get_languages() or {}

        languages = self._call(f"fetching languages for {owner}/{name}", fetch)
        return {lang: int(b) for lang, b in languages.items()}
