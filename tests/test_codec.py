import re

import pytest

from iriref import normalize_percent_encoding, pct_decode, pct_encode


@pytest.mark.parametrize(
    ("in_", "out"),
    (
        ("", ""),
        ("a%2fb", "a%2Fb"),
        ("%c3%a9%C3%A9", "%C3%A9%C3%A9"),
        ("%zz%4", "%zz%4"),
        ("ABC%aBc", "ABC%ABc"),
    ),
)
def test_normalize_percent_encoding(in_, out):
    assert normalize_percent_encoding(in_) == out


@pytest.mark.parametrize(
    ("text", "allowed", "out"),
    (
        ("", None, ""),
        ("a b", None, "a%20b"),
        ("café", None, "café"),
        ("café", "{unreserved}", "caf%C3%A9"),
        ("€", "{unreserved}", "%E2%82%AC"),
        ("\U00010348", "{unreserved}", "%F0%90%8D%88"),
        ("100%", None, "100%25"),
        ("a/b?c", None, "a%2Fb%3Fc"),
        ("a/b?c", "%|{unreserved}|{reserved}", "a/b?c"),
        ("%2f", "%|{unreserved}", "%2F"),
        ("\ue000", None, "%EE%80%80"),
        ("\ue000", "{iprivate}", "\ue000"),
    ),
)
def test_pct_encode(text, allowed, out):
    assert pct_encode(text, allowed) == out


def test_pct_encode_with_compiled_pattern():
    assert pct_encode("a-b", re.compile("[a-z]")) == "a%2Db"


def test_pct_encode_is_idempotent():
    allowed = "%|{unreserved}|{reserved}"
    once = pct_encode("http://例え.jp/a b", allowed)
    assert once == "http://%E4%BE%8B%E3%81%88.jp/a%20b"
    assert pct_encode(once, allowed) == once


def test_pct_encode_surrogates():
    with pytest.raises(UnicodeEncodeError):
        pct_encode("\ud800")


@pytest.mark.parametrize(
    ("text", "allowed", "out"),
    (
        ("", None, ""),
        ("plain", None, "plain"),
        ("caf%C3%A9", None, "café"),
        ("caf%c3%a9", None, "café"),
        ("%41%42", None, "AB"),
        ("%7e%2f", None, "~%2F"),
        ("%7E%2F", "{unreserved}|/", "~/"),
        ("%e2%82%ac", None, "€"),
        ("%C2%A0", None, "\xa0"),
        ("%F0%90%8D%88", None, "\U00010348"),
        ("%C3%A9", "{unreserved}", "%C3%A9"),
        ("%EE%80%80", None, "%EE%80%80"),
        ("%EE%80%80", "{iprivate}", "\ue000"),
        ("%25", None, "%25"),
        ("%25", "%|{iunreserved}", "%"),
        ("%20%41", None, "%20A"),
        # percent signs that don't start an octet
        ("100%", None, "100%"),
        ("%4", None, "%4"),
        ("%%41", None, "%A"),
        ("%zz", None, "%zz"),
    ),
)
def test_pct_decode(text, allowed, out):
    assert pct_decode(text, allowed) == out


@pytest.mark.parametrize(
    ("text", "out"),
    (
        # stray continuation octets
        ("%A9", "%A9"),
        ("%a9x", "%A9x"),
        ("%41%A9", "A%A9"),
        # truncated sequences
        ("%E2%82", "%E2%82"),
        ("%e2%82x", "%E2%82x"),
        ("%E2%82%41", "%E2%82A"),
        ("%E2%82%C3%A9", "%E2%82é"),
        # invalid lead octets
        ("%FF", "%FF"),
        ("%F8%88%80%80%80", "%F8%88%80%80%80"),
        # overlong form
        ("%C0%AF", "%C0%AF"),
        # encoded surrogate
        ("%ED%A0%80", "%ED%A0%80"),
        # beyond U+10FFFF
        ("%F4%90%80%80", "%F4%90%80%80"),
    ),
)
def test_pct_decode_keeps_invalid_sequences(text, out):
    assert pct_decode(text) == out


@pytest.mark.parametrize(
    ("text", "allowed"),
    (
        ("a%2fb%c3%a9", "%|{unreserved}"),
        ("%E2%82%ac%20x", "%|{unreserved}"),
        ("caf%20é", "%|{iunreserved}"),
        ("a/b%3F", "%|{unreserved}|/"),
    ),
)
def test_decoding_then_encoding_only_normalizes(text, allowed):
    result = pct_encode(pct_decode(text, allowed), allowed)
    assert result == normalize_percent_encoding(text)
    assert result.lower() == text.lower()


@pytest.mark.parametrize(
    "text", ("café au lait", "パス/値?#", "100% \U00010348", "~user")
)
def test_encoding_then_decoding_restores(text):
    assert pct_decode(pct_encode(text, ""), ".") == text


@pytest.mark.parametrize(
    ("text", "out"),
    (
        ("a%2fb", "a%2Fb"),
        ("a%2Fb%20c", "a%2Fb%20c"),
        ("caf%C3%A9 x", "caf%C3%A9%20x"),
        ("100%", "100%25"),
        ("%4", "%254"),
        ("%zz", "%25zz"),
    ),
)
def test_pct_encode_keeps_encoded_octets(text, out):
    assert pct_encode(text) == out
    assert pct_encode(pct_encode(text)) == out


@pytest.mark.parametrize(
    "text", ("a%2fb", "%e2%82%ac%20x", "%41%2F%c3%a9", "plain")
)
def test_decoding_then_encoding_with_default_allowed_characters(text):
    decoded = pct_decode(text)
    assert pct_encode(decoded) == decoded
    assert pct_decode(pct_encode(decoded)) == decoded
