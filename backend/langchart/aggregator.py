from typing import Dict, Iterable, List, Protocol

from pydantic import BaseModel

from .github_client import Repository
from .logging import get_logger

logger = get_logger()

MAX_LANGUAGES = 10


class LanguageSource(Protocol):
    def list_owned_repositories(self) -> Iterable[Repository]: ...

    def get_repository_languages(self, owner: str, name: str) -> Dict[str, int]: ...


class RankedEntry(BaseModel):
    lang: str
    percent: float


def compute_language_totals(source: LanguageSource) -> Dict[str, int]:
    """Sum language bytes across every owned repository that is neither a fork nor archived.

    Repositories are visited one at a time; any upstream error aborts the whole
    aggregation.
    """
    totals: Dict[str, int] = {}
    counted = 0
    for repo in source.list_owned_repositories():
        if repo.fork or repo.archived:
            continue
        languages = source.get_repository_languages(repo.owner_login, repo.name)
        for lang, b in languages.items():
            totals[lang] = totals.get(lang, 0) + max(0, int(b))
        counted += 1
    logger.info("Aggregated %d languages from %d repositories", len(totals), counted)
    return totals


def rank_languages(totals: Dict[str, int], limit: int = MAX_LANGUAGES) -> List[RankedEntry]:
    # Equal byte counts fall back to the language name so output is stable.
    ordered = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))[:limit]
    selected_total = sum(b for _, b in ordered)
    if selected_total <= 0:
        return []
    return [
        RankedEntry(lang=lang, percent=round(b / selected_total * 100, 2))
        for lang, b in ordered
    ]


def get_language_chart_data(source: LanguageSource, limit: int = MAX_LANGUAGES) -> List[RankedEntry]:
    return rank_languages(compute_language_totals(source), limit=limit)
