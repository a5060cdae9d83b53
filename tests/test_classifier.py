"""Tests for keyword-based task classification."""

from enum import Enum

from pipeline.classifier import classify, score


class Kind(str, Enum):
    API = "api"
    AUTH = "auth"
    CODE = "code"


TABLE = {
    Kind.API: ["api", "endpoint", "rest"],
    Kind.AUTH: ["login", "jwt"],
    Kind.CODE: ["injection", "vulnerability"],
}


def test_rest_endpoints_classified_as_api():
    spec = "Review our REST endpoints for injection risks"
    assert score(spec, TABLE) == {Kind.API: 2, Kind.AUTH: 0, Kind.CODE: 1}
    assert classify(spec, TABLE, Kind.CODE) is Kind.API


def test_no_keywords_returns_default():
    assert classify("make it better", TABLE, Kind.CODE) is Kind.CODE
    assert classify("", TABLE, Kind.AUTH) is Kind.AUTH


def test_tie_goes_to_first_declared_variant():
    # one API keyword and one AUTH keyword
    assert classify("jwt for the rest layer", TABLE, Kind.CODE) is Kind.API


def test_matching_is_case_insensitive():
    assert classify("JWT LOGIN broken", TABLE, Kind.CODE) is Kind.AUTH


def test_keywords_count_once():
    counts = score("login login login", TABLE)
    assert counts[Kind.AUTH] == 1


def test_classification_is_pure():
    spec = "Check the login endpoint for injection"
    first = classify(spec, TABLE, Kind.CODE)
    for _ in range(5):
        assert classify(spec, TABLE, Kind.CODE) is first


def test_substring_matches_count():
    # "api" inside "rapid" still counts
    assert score("rapid prototyping", TABLE)[Kind.API] == 1
