import pytest

from iriref import IRI


RFC_3986_BASE = "http://a/b/c/d;p?q"


@pytest.fixture
def base():
    return IRI(RFC_3986_BASE)
