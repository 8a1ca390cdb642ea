"""
Tests for language aggregation and ranking.

Property tests use hypothesis over arbitrary non-negative byte totals.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from conftest import FakeLanguageSource, repo
from langchart.aggregator import (
    MAX_LANGUAGES,
    RankedEntry,
    compute_language_totals,
    get_language_chart_data,
    rank_languages,
)
from langchart.exceptions import UpstreamNetworkError

language_names = st.text(
    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd"), whitelist_characters="+#-"),
    min_size=1,
    max_size=20,
)

totals_strategy = st.dictionaries(
    keys=language_names,
    values=st.integers(min_value=1, max_value=10**9),
    min_size=1,
    max_size=40,
)


def test_sums_bytes_across_repositories(source):
    totals = compute_language_totals(source)
    assert totals == {"JavaScript": 800, "Python": 200}
    assert source.language_calls == ["octocat/web", "octocat/tools"]


def test_fork_contributes_nothing():
    src = FakeLanguageSource(
        repos=[repo("mine"), repo("forked", fork=True)],
        languages={
            "octocat/mine": {"Go": 100},
            "octocat/forked": {"Go": 5000, "Rust": 900},
        },
    )
    assert compute_language_totals(src) == {"Go": 100}
    assert "octocat/forked" not in src.language_calls


def test_archived_repository_skipped():
    src = FakeLanguageSource(
        repos=[repo("old", archived=True), repo("new")],
        languages={"octocat/old": {"Perl": 999}, "octocat/new": {"Python": 1}},
    )
    assert compute_language_totals(src) == {"Python": 1}
    assert src.language_calls == ["octocat/new"]


def test_no_repositories_gives_empty_totals():
    assert compute_language_totals(FakeLanguageSource()) == {}


def test_upstream_error_propagates():
    src = FakeLanguageSource(error=UpstreamNetworkError("boom"))
    with pytest.raises(UpstreamNetworkError):
        compute_language_totals(src)


def test_rank_scenario_javascript_python():
    ranked = rank_languages({"JavaScript": 800, "Python": 200})
    assert ranked == [
        RankedEntry(lang="JavaScript", percent=80.0),
        RankedEntry(lang="Python", percent=20.0),
    ]


def test_rank_empty_totals():
    assert rank_languages({}) == []


def test_rank_all_zero_bytes():
    assert rank_languages({"Markdown": 0, "Text": 0}) == []


def test_percent_is_share_of_top_ten_only():
    totals = {f"Lang{i:02d}": 100 for i in range(10)}
    totals["Tiny"] = 1
    ranked = rank_languages(totals)
    assert len(ranked) == 10
    assert all(e.percent == 10.0 for e in ranked)
    assert "Tiny" not in [e.lang for e in ranked]


def test_ties_broken_by_language_name():
    ranked = rank_languages({"Ruby": 50, "C": 50, "Go": 100, "Ada": 50})
    assert [e.lang for e in ranked] == ["Go", "Ada", "C", "Ruby"]


def test_percent_rounded_to_two_decimals():
    ranked = rank_languages({"A": 1, "B": 1, "C": 1})
    assert [e.percent for e in ranked] == [33.33, 33.33, 33.33]


def test_get_language_chart_data(source):
    ranked = get_language_chart_data(source)
    assert [(e.lang, e.percent) for e in ranked] == [("JavaScript", 80.0), ("Python", 20.0)]


@given(totals=totals_strategy)
@settings(max_examples=200)
def test_property_at_most_ten_sorted_non_increasing(totals):
    ranked = rank_languages(totals)
    assert 1 <= len(ranked) <= MAX_LANGUAGES
    byte_counts = [totals[e.lang] for e in ranked]
    assert byte_counts == sorted(byte_counts, reverse=True)


@given(totals=totals_strategy)
@settings(max_examples=200)
def test_property_percents_sum_to_hundred(totals):
    ranked = rank_languages(totals)
    assert abs(sum(e.percent for e in ranked) - 100.0) <= 0.1


@given(totals=totals_strategy)
@settings(max_examples=100)
def test_property_selected_languages_are_the_largest(totals):
    ranked = rank_languages(totals)
    shown = {e.lang for e in ranked}
    smallest_shown = min(totals[lang] for lang in shown)
    assert all(b <= smallest_shown for lang, b in totals.items() if lang not in shown)
