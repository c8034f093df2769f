"""Tests for listing pagination."""

import pytest
from starlette.datastructures import URL, QueryParams

from app.modules.pages.pagination import (
    build_pagination,
    current_page,
    go_to,
    total_pages,
    visible_window,
)


def test_total_pages():
    assert total_pages(0, 15) == 0
    assert total_pages(15, 15) == 1
    assert total_pages(16, 15) == 2
    assert total_pages(45, 15) == 3


@pytest.mark.parametrize(
    "current,pages,expected",
    [
        (1, 1, [1]),
        (1, 2, [1, 2]),
        (1, 5, [1, 2, 3]),
        (3, 5, [2, 3, 4]),
        (5, 5, [3, 4, 5]),
        (4, 5, [3, 4, 5]),
        (9, 4, [2, 3, 4]),
        (0, 4, [1, 2, 3]),
        (1, 0, []),
    ],
)
def test_visible_window(current, pages, expected):
    assert visible_window(current, pages) == expected


def test_visible_window_properties():
    for pages in range(1, 12):
        for current in range(1, pages + 1):
            window = visible_window(current, pages)
            assert 1 <= len(window) <= 3
            assert window == list(range(window[0], window[-1] + 1))
            assert window[0] >= 1 and window[-1] <= pages
            assert current in window


@pytest.mark.parametrize("total", [0, 1, 14, 15])
def test_no_pagination_when_everything_fits(total):
    assert build_pagination(URL("https://test/documents"), 1, total, 15) is None


def test_build_pagination_links_keep_query():
    url = URL("https://test/documents?sort=name-asc&query=tax&page=2")
    pagination = build_pagination(url, 2, 100, 15)

    assert pagination.total_pages == 7
    assert [link.page for link in pagination.pages] == [1, 2, 3]
    assert [link.active for link in pagination.pages] == [False, True, False]
    assert pagination.previous.page == 1
    assert pagination.next.page == 3

    href = URL(pagination.next.href)
    params = QueryParams(href.query)
    assert href.path == "/documents"
    assert params["page"] == "3"
    assert params["sort"] == "name-asc"
    assert params["query"] == "tax"


def test_build_pagination_edges_disabled():
    url = URL("https://test/images")
    first = build_pagination(url, 1, 40, 15)
    assert first.previous is None
    assert first.next.page == 2

    last = build_pagination(url, 3, 40, 15)
    assert last.next is None
    assert last.previous.page == 2


def test_go_to_adds_page():
    assert go_to(URL("https://test/media"), 4) == "/media?page=4"


def test_current_page_from_url():
    assert current_page(URL("https://test/media")) == 1
    assert current_page(URL("https://test/media?page=3")) == 3
    assert current_page(URL("https://test/media?page=abc")) == 1
    assert current_page(URL("https://test/media?page=-2")) == 1


def test_previous_clamped_when_page_past_end():
    pagination = build_pagination(URL("https://test/documents?page=9"), 9, 40, 15)

    assert pagination.total_pages == 3
    assert pagination.previous.page == 3
    assert pagination.next is None
