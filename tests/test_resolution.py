import warnings

import pytest

from iriref import IRI, InvalidBase, ResolutionOptions
from iriref.exceptions import FragmentDiscardedWarning


# https://tools.ietf.org/html/rfc3986#section-5.4
@pytest.mark.parametrize(
    ("reference", "target"),
    (
        # normal examples
        ("g:h", "g:h"),
        ("g", "http://a/b/c/g"),
        ("./g", "http://a/b/c/g"),
        ("g/", "http://a/b/c/g/"),
        ("/g", "http://a/g"),
        ("//g", "http://g"),
        ("?y", "http://a/b/c/d;p?y"),
        ("g?y", "http://a/b/c/g?y"),
        (";x", "http://a/b/c/;x"),
        ("g;x", "http://a/b/c/g;x"),
        ("", "http://a/b/c/d;p?q"),
        (".", "http://a/b/c/"),
        ("./", "http://a/b/c/"),
        ("..", "http://a/b/"),
        ("../", "http://a/b/"),
        ("../g", "http://a/b/g"),
        ("../..", "http://a/"),
        ("../../", "http://a/"),
        ("../../g", "http://a/g"),
        # abnormal examples
        ("../../../g", "http://a/g"),
        ("../../../../g", "http://a/g"),
        ("/./g", "http://a/g"),
        ("/../g", "http://a/g"),
        ("g.", "http://a/b/c/g."),
        (".g", "http://a/b/c/.g"),
        ("g..", "http://a/b/c/g.."),
        ("..g", "http://a/b/c/..g"),
        ("./../g", "http://a/b/g"),
        ("./g/.", "http://a/b/c/g/"),
        ("g/./h", "http://a/b/c/g/h"),
        ("g/../h", "http://a/b/c/h"),
        ("g;x=1/./y", "http://a/b/c/g;x=1/y"),
        ("g;x=1/../y", "http://a/b/c/y"),
        ("g?y/./x", "http://a/b/c/g?y/./x"),
        ("g?y/../x", "http://a/b/c/g?y/../x"),
        ("http:g", "http:g"),
    ),
)
def test_rfc_3986_examples(base, reference, target):
    result = IRI(reference).resolve(base)
    assert result.href == target
    assert result == IRI(target)


# the resolved target never carries a fragment, other than RFC 3986 specifies
@pytest.mark.parametrize(
    ("reference", "target"),
    (
        ("#s", "http://a/b/c/d;p?q"),
        ("g#s", "http://a/b/c/g"),
        ("g?y#s", "http://a/b/c/g?y"),
        ("g#s/./x", "http://a/b/c/g"),
        ("g#s/../x", "http://a/b/c/g"),
        ("//g#s", "http://g"),
        ("ftp://h/#s", "ftp://h/"),
    ),
)
def test_fragments_are_cleared(base, reference, target):
    with pytest.warns(FragmentDiscardedWarning):
        result = IRI(reference).resolve(base)
    assert result.href == target
    assert result.fragment is None


def test_base_fragment_is_cleared():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        result = IRI("g").resolve("http://a/b#f")
    assert result.href == "http://a/g"


@pytest.mark.parametrize(
    ("reference", "target"),
    (
        ("#s", "http://a/b/c/d;p?q#s"),
        ("g#s", "http://a/b/c/g#s"),
        ("g?y#s", "http://a/b/c/g?y#s"),
        ("g#s/../x", "http://a/b/c/g#s/../x"),
        ("g", "http://a/b/c/g"),
    ),
)
def test_preserve_fragment(base, reference, target):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        result = IRI(reference).resolve(
            base, ResolutionOptions(preserve_fragment=True)
        )
    assert result.href == target


@pytest.mark.parametrize(
    ("strict", "target"), ((True, "http:g"), (False, "http://a/b/c/g"))
)
def test_strictness(base, strict, target):
    assert IRI("http:g").resolve(base, ResolutionOptions(strict=strict)) == target


def test_non_strict_resolution_keeps_other_schemes(base):
    result = IRI("ftp:g").resolve(base, ResolutionOptions(strict=False))
    assert result.href == "ftp:g"


def test_resolve_against_authority_components():
    base = IRI("http://user@a:8080/b/c?q")
    assert IRI("d").resolve(base).href == "http://user@a:8080/b/d"
    assert IRI("?y").resolve(base).href == "http://user@a:8080/b/c?y"
    assert IRI("//x/y").resolve(base).href == "http://x/y"


def test_resolve_against_base_without_path():
    assert IRI("g").resolve("http://a").href == "http://a/g"
    assert IRI("?y").resolve("http://a").href == "http://a?y"


def test_resolve_normalizes_target(base):
    result = IRI("HTTPS://EXAMPLE.org/a/./%7e/../b").resolve(base)
    assert result.href == "https://example.org/a/b"


def test_resolve_creates_new_instance(base):
    reference = IRI("g")
    result = reference.resolve(base)

    assert result is not base
    assert result is not reference
    result.path = "/x"
    assert base.path == "/b/c/d;p"
    assert reference.path == "g"


@pytest.mark.parametrize("base", ("", "g", "/a/b", "//a/b", "?q"))
def test_relative_base(base):
    with pytest.raises(InvalidBase):
        IRI("g").resolve(base)
    with pytest.raises(InvalidBase):
        IRI("http://a/").resolve(IRI(base))


def test_invalid_base_carries_base():
    base = IRI("//a/b")
    with pytest.raises(InvalidBase) as exception_info:
        IRI("g").resolve(base)
    assert exception_info.value.base is base
    assert isinstance(exception_info.value, ValueError)
