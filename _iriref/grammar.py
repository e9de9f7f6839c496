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
The productions of `RFC 3987 <https://tools.ietf.org/html/rfc3987>`_ and
`RFC 3986 <https://tools.ietf.org/html/rfc3986>`_ that define the lexical space of
IRIs and their components.

Each production is a regular expression pattern that refers to the productions it is
composed of by name, e.g. ``{sub_delims}``. The definitions are expanded once when
the module is imported, the resulting mapping and the compiled matchers are only read
afterwards.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import TYPE_CHECKING, NamedTuple, Optional

from _iriref.exceptions import InvalidIRI

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Final


COMPONENTS: Final = (
    "scheme",
    "userinfo",
    "host",
    "port",
    "path",
    "query",
    "fragment",
)


class IRIComponents(NamedTuple):
    """
    The components of an IRI reference. A component that isn't present is
    :obj:`None`, one that is present but empty is an empty string.
    """

    scheme: Optional[str] = None
    userinfo: Optional[str] = None
    host: Optional[str] = None
    port: Optional[str | int] = None
    path: Optional[str] = None
    query: Optional[str] = None
    fragment: Optional[str] = None


# productions


def _expand(definitions: tuple[tuple[str, str], ...]) -> Mapping[str, str]:
    # definitions must be ordered so that a production is only referenced by those
    # that follow it
    result: dict[str, str] = {}
    for name, pattern in definitions:
        result[name] = pattern.format(**result)
    return MappingProxyType(result)


productions: Final = _expand(
    (
        # CHARACTER CLASSES
        ("alpha", r"[A-Za-z]"),
        ("digit", r"[0-9]"),
        ("hexdig", r"[0-9A-Fa-f]"),
        ("sub_delims", r"[!$&'()*+,;=]"),
        ("gen_delims", r"[:/?#\[\]@]"),
        ("reserved", r"(?:{gen_delims}|{sub_delims})"),
        ("unreserved", r"(?:{alpha}|{digit}|[-._~])"),
        ("pct_encoded", r"%{hexdig}{hexdig}"),
        (
            "ucschar",
            r"["
            r"\xA0-\uD7FF\uF900-\uFDCF\uFDF0-\uFFEF"
            r"\U00010000-\U0001FFFD\U00020000-\U0002FFFD\U00030000-\U0003FFFD"
            r"\U00040000-\U0004FFFD\U00050000-\U0005FFFD\U00060000-\U0006FFFD"
            r"\U00070000-\U0007FFFD\U00080000-\U0008FFFD\U00090000-\U0009FFFD"
            r"\U000A0000-\U000AFFFD\U000B0000-\U000BFFFD\U000C0000-\U000CFFFD"
            r"\U000D0000-\U000DFFFD\U000E1000-\U000EFFFD"
            r"]",
        ),
        ("iprivate", r"[\uE000-\uF8FF\U000F0000-\U000FFFFD\U00100000-\U0010FFFD]"),
        ("iunreserved", r"(?:{unreserved}|{ucschar})"),
        ("ipchar", r"(?:{iunreserved}|{pct_encoded}|{sub_delims}|[:@])"),
        # COMPONENTS
        ("scheme", r"{alpha}(?:{alpha}|{digit}|[+.-])*"),
        ("userinfo", r"(?:{iunreserved}|{pct_encoded}|{sub_delims}|:)*"),
        ("ireg_name", r"(?:{iunreserved}|{pct_encoded}|{sub_delims})*"),
        ("ip_literal", r"\[(?:{unreserved}|{sub_delims}|:)+\]"),
        ("host", r"(?:{ireg_name}|{ip_literal})"),
        ("port", r"{digit}*"),
        # equivalent to *( [ "/" ] *ipchar ), but without nested repetitions of
        # possibly empty matches that backtrack exponentially
        ("path", r"(?:{ipchar}|/)*"),
        ("query", r"(?:{ipchar}|{iprivate}|[/?])*"),
        ("fragment", r"(?:{ipchar}|[/?])*"),
        # REFERENCE
        (
            "iri_reference",
            # without a scheme the first segment must not contain a colon
            r"(?:(?P<scheme>{scheme}):|(?![^/?\#]*:))"
            # an authority ends where the path, query or fragment begins, without
            # one a path can't start with two slashes
            r"(?:"
            r"//"
            r"(?:(?P<userinfo>{userinfo})@)?"
            r"(?P<host>{host})"
            r"(?::(?P<port>{port}))?"
            r"(?=[/?\#]|\Z)"
            r"|(?!//)"
            r")"
            r"(?P<path>{path})"
            r"(?:\?(?P<query>{query}))?"
            r"(?:\#(?P<fragment>{fragment}))?",
        ),
    )
)


def expand_pattern(pattern: str) -> str:
    """
    Substitutes references to :data:`productions` in a pattern, e.g.
    ``"%|{unreserved}"``. Literal braces must be doubled as with :meth:`str.format`.

    :raises KeyError: When an unknown production is referenced.
    """
    return pattern.format(**productions)


# matchers

_field_matchers: Final[Mapping[str, Callable[[str], Optional[re.Match]]]] = (
    MappingProxyType(
        {name: re.compile(productions[name]).fullmatch for name in COMPONENTS}
    )
)
_match_iri_reference: Final = re.compile(productions["iri_reference"]).fullmatch


def matches(component: str, string: str) -> bool:
    """
    Tests whether the whole ``string`` matches the production of an IRI component.

    >>> matches("scheme", "urn")
    True
    >>> matches("port", "http")
    False

    :raises KeyError: When ``component`` isn't one of :data:`COMPONENTS`.
    """
    return _field_matchers[component](string) is not None


def parse(string: str) -> IRIComponents:
    """
    Splits an IRI reference into its components without any normalization.

    >>> parse("http://example.org/?q").host
    'example.org'
    >>> parse("?q").path
    ''
    >>> parse("?q").fragment is None
    True

    :raises InvalidIRI: When the string isn't a valid IRI reference.
    """
    match = _match_iri_reference(string)
    if match is None:
        raise InvalidIRI(string)
    return IRIComponents(**match.groupdict())


__all__ = (
    "COMPONENTS",
    IRIComponents.__name__,
    expand_pattern.__name__,
    matches.__name__,
    parse.__name__,
    "productions",
)
