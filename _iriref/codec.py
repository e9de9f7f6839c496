# Copyright (C) 2018-'25  Frank Sachsenheim
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Percent-encoding and -decoding of text as defined in
`RFC 3986, section 2.1 <https://tools.ietf.org/html/rfc3986#section-2.1>`_ and
`RFC 3987, section 3.1 <https://tools.ietf.org/html/rfc3987#section-3.1>`_.

Both directions are parametrized with a pattern that defines which characters may
appear literally, see :data:`_iriref.typing.AllowedPattern`.
"""

from __future__ import annotations

import re
from functools import lru_cache, partial
from typing import TYPE_CHECKING, TypeAlias

from _iriref.exceptions import InvalidCodePath
from _iriref.grammar import expand_pattern

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from typing import Final

    from _iriref.typing import AllowedPattern


Matcher: TypeAlias = "Callable[[str], re.Match[str] | None]"


DEFAULT_ALLOWED: Final = "{iunreserved}"

_CONTINUATION_MASK: Final = 0b1100_0000
_CONTINUATION_BITS: Final = 0b1000_0000
# (mask, bits, length of the sequence) for the lead octet of UTF-8 sequences
_LEAD_OCTETS: Final = (
    (0b1000_0000, 0b0000_0000, 1),
    (0b1110_0000, 0b1100_0000, 2),
    (0b1111_0000, 0b1110_0000, 3),
    (0b1111_1000, 0b1111_0000, 4),
)


_iterate_characters: Final = re.compile(
    r"(?P<OCTET>%[0-9A-Fa-f]{2})|(?P<CHARACTER>.)", re.DOTALL
).finditer
_iterate_pieces: Final = re.compile(
    r"%(?P<OCTET>[0-9A-Fa-f]{2})|(?P<TEXT>[^%]+|%)"
).finditer
_uppercase_triplets: Final = partial(
    re.compile(r"%[0-9A-Fa-f]{2}").sub, lambda match: match.group().upper()
)


# helpers


@lru_cache(64)
def _compile_allowed(pattern: str) -> Matcher:
    return re.compile(expand_pattern(pattern), re.DOTALL).fullmatch


def _allowed_matcher(allowed: AllowedPattern) -> Matcher:
    if allowed is None:
        allowed = DEFAULT_ALLOWED
    if isinstance(allowed, re.Pattern):
        return allowed.fullmatch
    return _compile_allowed(allowed)


def _encode_octets(octets: Iterable[int]) -> str:
    return "".join(f"%{octet:02X}" for octet in octets)


def _sequence_length(octet: int) -> int:
    for mask, bits, length in _LEAD_OCTETS:
        if octet & mask == bits:
            return length
    return 0


class _OctetsAssembler:
    """
    Collects decoded octets into UTF-8 sequences and emits each assembled character
    either literally or percent-encoded, depending on whether it's allowed.
    Octets that don't form a valid sequence are kept percent-encoded.
    """

    __slots__ = ("is_allowed", "length", "octets", "result")

    def __init__(self, is_allowed: Matcher):
        self.is_allowed = is_allowed
        self.length = 0
        self.octets = bytearray()
        self.result: list[str] = []

    def feed_octet(self, octet: int):
        if octet & _CONTINUATION_MASK == _CONTINUATION_BITS:
            if self.octets:
                self.octets.append(octet)
                if len(self.octets) == self.length:
                    self.emit()
            else:
                self.result.append(_encode_octets((octet,)))
            return

        self.flush()
        if (length := _sequence_length(octet)) == 0:
            self.result.append(_encode_octets((octet,)))
            return

        self.length = length
        self.octets.append(octet)
        if length == 1:
            self.emit()

    def feed_text(self, text: str):
        self.flush()
        self.result.append(text)

    def emit(self):
        octets = bytes(self.octets)
        self.octets.clear()
        self.length = 0

        try:
            character = octets.decode("utf-8")
        except UnicodeDecodeError:
            # overlong forms, encoded surrogates and code points beyond U+10FFFF
            self.result.append(_encode_octets(octets))
            return

        if self.is_allowed(character) is None:
            self.result.append(_encode_octets(octets))
        else:
            self.result.append(character)

    def flush(self):
        # an incomplete sequence
        if self.octets:
            self.result.append(_encode_octets(self.octets))
            self.octets.clear()
            self.length = 0


# interface


def normalize_percent_encoding(text: str) -> str:
    """
    Uppercases the hexadecimal digits of all percent-encoded octets.

    >>> normalize_percent_encoding("caf%c3%a9")
    'caf%C3%A9'
    """
    return _uppercase_triplets(text)


def pct_encode(text: str, allowed: AllowedPattern = None) -> str:
    """
    Percent-encodes each character of ``text`` that isn't matched by ``allowed``
    as the octets of its UTF-8 representation. Octets that are already
    percent-encoded are kept, so that encoding is idempotent.

    >>> pct_encode("café au lait")
    'café%20au%20lait'
    >>> pct_encode("café", "{unreserved}")
    'caf%C3%A9'
    >>> pct_encode("a%2fb 100%")
    'a%2Fb%20100%25'

    :param text: The text to encode.
    :param allowed: The characters that are kept literally. Defaults to
                    ``{iunreserved}``.
    :raises UnicodeEncodeError: When ``text`` contains surrogates.
    """
    is_allowed = _allowed_matcher(allowed)
    result = []

    for match in _iterate_characters(text):
        match match.lastgroup:
            case "OCTET":
                result.append(match.group())
            case "CHARACTER":
                character = match.group()
                if is_allowed(character) is None:
                    result.append(_encode_octets(character.encode("utf-8")))
                else:
                    result.append(character)
            case _:  # pragma: no cover
                raise InvalidCodePath

    return normalize_percent_encoding("".join(result))


def pct_decode(text: str, allowed: AllowedPattern = None) -> str:
    """
    Decodes the percent-encoded characters of ``text`` that are matched by
    ``allowed``, all others are kept encoded. Multi-octet sequences are decoded as
    UTF-8, octets that don't form a valid sequence are never dropped, but kept
    encoded.

    >>> pct_decode("caf%C3%A9%20au%20lait")
    'café%20au%20lait'
    >>> pct_decode("%7e%2F", "{unreserved}|/")
    '~/'

    :param text: The text to decode.
    :param allowed: The characters that are decoded. Defaults to ``{iunreserved}``.
    """
    assembler = _OctetsAssembler(_allowed_matcher(allowed))

    for match in _iterate_pieces(text):
        match match.lastgroup:
            case "OCTET":
                assembler.feed_octet(int(match.group("OCTET"), 16))
            case "TEXT":
                assembler.feed_text(match.group())
            case _:  # pragma: no cover
                raise InvalidCodePath

    assembler.flush()
    return normalize_percent_encoding("".join(assembler.result))


__all__ = (
    "DEFAULT_ALLOWED",
    normalize_percent_encoding.__name__,
    pct_decode.__name__,
    pct_encode.__name__,
)
