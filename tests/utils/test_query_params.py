"""Tests for the query parameter echo used in pagination links."""

import pytest

from ats_api.utils.query_params import extract_filter_params

PATH = "/resource"


def test_without_params():
    assert extract_filter_params(PATH, PATH) == ""


@pytest.mark.parametrize(
    "url",
    ["/resource?page=0&perPage=60", "/resource?page=0", "/resource?perPage=60", "/resource?"],
)
def test_removes_pagination_params(url):
    assert extract_filter_params(url, PATH) == ""


def test_keeps_extra_params():
    url = "/resource?page=0&perPage=60&param[key][]=value"
    assert extract_filter_params(url, PATH) == "&param[key][]=value"


def test_removes_given_params():
    url = "/resource?page=0&perPage=60&param[key][]=value&param2[key][]=value"

    assert extract_filter_params(url, PATH) == "&param[key][]=value&param2[key][]=value"
    assert extract_filter_params(url, PATH, ["param[key][]"]) == "&param2[key][]=value"
    assert extract_filter_params(url, PATH, ["param[key][]", "param2[key][]"]) == ""


def test_pagination_params_anywhere_in_the_query():
    url = "/offers?job[criterias][]=dev&page=2&order[job]=ASC&perPage=10"
    assert extract_filter_params(url, "/offers") == "&job[criterias][]=dev&order[job]=ASC"


def test_percent_encoded_keys_are_matched():
    url = "/offers?job%5Bcriterias%5D%5B%5D=dev&page=1"

    assert extract_filter_params(url, "/offers") == "&job%5Bcriterias%5D%5B%5D=dev"
    assert extract_filter_params(url, "/offers", ["job[criterias][]"]) == ""


def test_keeps_values_verbatim():
    url = "/offers?job[criterias][]=back%20end&perPage=5"
    assert extract_filter_params(url, "/offers") == "&job[criterias][]=back%20end"


@pytest.mark.parametrize(
    "url",
    [
        "/resource?page=0&perPage=60&param[key][]=value",
        "/resource?a=1&b=2&page=3",
        "/resource",
    ],
)
def test_idempotent(url):
    once = extract_filter_params(url, PATH)
    assert extract_filter_params(PATH + "?" + once.lstrip("&"), PATH) == once
