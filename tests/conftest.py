"""
Shared fixtures: small menu trees in the host's flat item shape.
"""

import pytest
from bs4 import BeautifulSoup

from menuwalk.lib.security import urlCache_clear


def item(item_id, title, parent=0, **fields):
    """Flat host item; ``parent`` is the menu_item_parent id"""
    return {"ID": item_id, "title": title, "url": f"/{title.lower()}", "menu_item_parent": parent, **fields}


def soup_make(html):
    return BeautifulSoup(html, "html.parser")


@pytest.fixture(autouse=True)
def url_cache_reset():
    """Memoized URL results must not leak between tests that change settings"""
    urlCache_clear()
    yield
    urlCache_clear()


@pytest.fixture
def shop_tree():
    """[Home, Shop[Shoes, Hats]]"""
    return [
        item(1, "Home"),
        item(2, "Shop"),
        item(3, "Shoes", parent=2),
        item(4, "Hats", parent=2),
    ]


@pytest.fixture
def deep_tree():
    """Three levels: Products > Tools > Hammer, plus a top-level About"""
    return [
        item(1, "Products"),
        item(42, "Tools", parent=1),
        item(43, "Hammer", parent=42),
        item(50, "About"),
    ]


@pytest.fixture
def mega_tree():
    """One top-level parent with seven sections"""
    sections = [item(10 + n, f"Section{n}", parent=1) for n in range(7)]
    return [item(1, "Catalog"), *sections, item(2, "Contact")]
