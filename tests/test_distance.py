"""Tests for edit distance helpers."""

import pytest

from kube_search_mcp.search.distance import bounded_levenshtein, distance_score, levenshtein


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("", "", 0),
        ("abc", "", 3),
        ("", "abc", 3),
        ("nginx", "nginx", 0),
        ("ngnix", "nginx", 2),
        ("kitten", "sitting", 3),
        ("webapp", "webapp-1", 2),
    ],
)
def test_levenshtein_known_values(a, b, expected):
    assert levenshtein(a, b) == expected


@pytest.mark.parametrize("a,b", [("redis", "rediss"), ("api", "app"), ("frontend", "fronted")])
def test_levenshtein_symmetric(a, b):
    assert levenshtein(a, b) == levenshtein(b, a)


def test_levenshtein_bounded_by_longer_length():
    assert levenshtein("abc", "xyz12") <= 5


def test_levenshtein_triangle_inequality():
    a, b, c = "webapp", "webap", "wbap"
    assert levenshtein(a, c) <= levenshtein(a, b) + levenshtein(b, c)


def test_bounded_prunes_on_length_difference():
    assert bounded_levenshtein("web", "my-webapp-svc", 2) is None


def test_bounded_returns_distance_within_limit():
    assert bounded_levenshtein("ngnix", "nginx", 2) == 2
    assert bounded_levenshtein("ngnix", "nginx", 1) is None


def test_distance_score_range():
    assert distance_score(0, "nginx", "nginx") == 1.0
    assert distance_score(2, "ngnix", "nginx") == pytest.approx(0.6)
    assert distance_score(0, "", "") == 1.0


@pytest.mark.parametrize("query,name", [("nginx", "nginx"), ("webapp", "webapp-1"), ("api", "backend-api")])
def test_distance_score_non_increasing_in_distance(query, name):
    longest = max(len(query), len(name))
    scores = [distance_score(d, query, name) for d in range(longest + 1)]

    assert scores == sorted(scores, reverse=True)
    assert scores[0] == 1.0
    assert scores[-1] == 0.0
