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

from __future__ import annotations

import re
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Optional

from _iriref.codec import pct_decode, pct_encode, normalize_percent_encoding
from _iriref.exceptions import (
    InvalidBase,
    InvalidFragment,
    InvalidHost,
    InvalidPath,
    InvalidPort,
    InvalidQuery,
    InvalidScheme,
    InvalidUserinfo,
)
from _iriref.grammar import COMPONENTS, IRIComponents, matches, parse
from _iriref.resolver import (
    DEFAULT_RESOLUTION_OPTIONS,
    ResolutionOptions,
    resolve_components,
)

if TYPE_CHECKING:
    from typing import Final

    from _iriref.exceptions import InvalidComponent
    from _iriref.typing import IRISource, Self


# constants

# characters that are decoded when an href is assigned, everything else that is
# percent-encoded in a URI stays so in the IRI
HREF_DECODING_ALLOWED: Final = "%|{iunreserved}"
URI_ENCODING_ALLOWED: Final = "%|{unreserved}|{reserved}"

MAX_PORT: Final = 65535

_COMPONENT_ERRORS: Final[MappingProxyType[str, type[InvalidComponent]]] = (
    MappingProxyType(
        {
            "scheme": InvalidScheme,
            "userinfo": InvalidUserinfo,
            "host": InvalidHost,
            "path": InvalidPath,
            "query": InvalidQuery,
            "fragment": InvalidFragment,
        }
    )
)

_is_port_literal: Final = re.compile(r"[+-]?[0-9]+").fullmatch


# validation


def _validated(component: str, value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TypeError(f"The {component} must be a string, got {type(value)}.")
    if not matches(component, value):
        raise _COMPONENT_ERRORS[component](value)
    return value


def _validated_port(value: Optional[int | str]) -> Optional[int]:
    if value is None or value == "":
        return None

    if isinstance(value, str):
        if _is_port_literal(value) is None:
            raise InvalidPort(value)
        port = int(value)
    elif isinstance(value, int) and not isinstance(value, bool):
        port = value
    else:
        raise InvalidPort(value)

    if not 0 <= port <= MAX_PORT:
        raise InvalidPort(value)
    return port


# api


class IRI:
    """
    An Internationalized Resource Identifier as defined in
    `RFC 3987 <https://tools.ietf.org/html/rfc3987>`_.

    All components are validated against their productions and normalized when they
    are assigned. A component that isn't present is :obj:`None`, assigning an empty
    string also removes it.

    >>> iri = IRI("HTTP://Example.ORG/caf%C3%A9?q#f")
    >>> iri.scheme, iri.host, iri.path
    ('http', 'example.org', '/café')
    >>> iri.uri
    'http://example.org/caf%C3%A9?q#f'

    :param href: An IRI reference that is parsed into the components.
    :raises InvalidIRI: When ``href`` can't be parsed.
    :raises InvalidComponent: When one of the parsed components is invalid.
    """

    __slots__ = (
        "_fragment",
        "_host",
        "_path",
        "_port",
        "_query",
        "_scheme",
        "_userinfo",
    )

    def __init__(self, href: Optional[str] = None):
        self._scheme: Optional[str] = None
        self._userinfo: Optional[str] = None
        self._host: Optional[str] = None
        self._port: Optional[int] = None
        self._path: Optional[str] = None
        self._query: Optional[str] = None
        self._fragment: Optional[str] = None
        if href:
            self.href = href

    def __copy__(self) -> Self:
        result = self.__class__()
        result._assign(self)
        return result

    def __deepcopy__(self, memo: dict) -> Self:
        return self.__copy__()

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, IRI):
            return self.components == other.components
        if isinstance(other, str):
            return self.href == other
        return NotImplemented

    def __repr__(self):
        return f"{self.__class__.__name__}({self.href!r})"

    def __str__(self):
        return self.href

    def _assign(self, other: IRI):
        self._scheme = other._scheme
        self._userinfo = other._userinfo
        self._host = other._host
        self._port = other._port
        self._path = other._path
        self._query = other._query
        self._fragment = other._fragment

    @classmethod
    def from_components(cls, **components: Optional[str | int]) -> Self:
        """
        Creates an instance from keyword arguments that are named after the
        components. Each is validated and normalized as if it were assigned.

        >>> str(IRI.from_components(scheme="urn", path="isbn:0451450523"))
        'urn:isbn:0451450523'
        """
        if unknown := set(components) - set(COMPONENTS):
            raise TypeError(f"Unknown components: {', '.join(sorted(unknown))}")

        result = cls()
        for name in COMPONENTS:
            setattr(result, name, components.get(name))
        return result

    # components

    @property
    def components(self) -> IRIComponents:
        """All components as named tuple."""
        return IRIComponents(
            scheme=self._scheme,
            userinfo=self._userinfo,
            host=self._host,
            port=self._port,
            path=self._path,
            query=self._query,
            fragment=self._fragment,
        )

    @property
    def scheme(self) -> Optional[str]:
        """The scheme in lower case."""
        return self._scheme

    @scheme.setter
    def scheme(self, value: Optional[str]):
        scheme = _validated("scheme", value)
        self._scheme = None if scheme is None else scheme.lower()

    @property
    def userinfo(self) -> Optional[str]:
        return self._userinfo

    @userinfo.setter
    def userinfo(self, value: Optional[str]):
        userinfo = _validated("userinfo", value)
        self._userinfo = (
            None if userinfo is None else normalize_percent_encoding(userinfo)
        )

    @property
    def host(self) -> Optional[str]:
        """
        The host in lower case, either a registered name or an IP literal enclosed in
        brackets.
        """
        return self._host

    @host.setter
    def host(self, value: Optional[str]):
        host = _validated("host", value)
        self._host = None if host is None else normalize_percent_encoding(host.lower())

    @property
    def port(self) -> Optional[int]:
        """
        The port number. Integers and strings of decimal digits in the range from 0 to
        65535 can be assigned.
        """
        return self._port

    @port.setter
    def port(self, value: Optional[int | str]):
        self._port = _validated_port(value)

    @property
    def path(self) -> Optional[str]:
        return self._path

    @path.setter
    def path(self, value: Optional[str]):
        path = _validated("path", value)
        self._path = None if path is None else normalize_percent_encoding(path)

    @property
    def query(self) -> Optional[str]:
        return self._query

    @query.setter
    def query(self, value: Optional[str]):
        query = _validated("query", value)
        self._query = None if query is None else normalize_percent_encoding(query)

    @property
    def fragment(self) -> Optional[str]:
        return self._fragment

    @fragment.setter
    def fragment(self, value: Optional[str]):
        fragment = _validated("fragment", value)
        self._fragment = (
            None if fragment is None else normalize_percent_encoding(fragment)
        )

    # serializations

    @property
    def href(self) -> str:
        """
        The IRI reference composed of all present components. Assigning a string
        replaces all components with those that are parsed from it. Percent-encoded
        characters that are allowed to appear literally in an IRI are decoded before.
        When any parsed component is invalid, none is replaced.
        """
        result = []
        path = self._path or ""

        if self._scheme is not None:
            result.append(f"{self._scheme}:")

        if self._host is not None:
            result.append("//")
            if self._userinfo is not None:
                result.append(f"{self._userinfo}@")
            result.append(self._host)
            if self._port is not None:
                result.append(f":{self._port}")
            if path and not path.startswith("/"):
                # a rootless path would be taken as part of the authority
                result.append("/")
        elif path.startswith("//"):
            # an empty authority keeps the path from being taken as one
            result.append("//")
        elif self._scheme is None and ":" in path.partition("/")[0]:
            # a colon in the first segment would be taken as scheme delimiter
            result.append("./")

        result.append(path)
        if self._query is not None:
            result.append(f"?{self._query}")
        if self._fragment is not None:
            result.append(f"#{self._fragment}")

        return "".join(result)

    @href.setter
    def href(self, value: str):
        components = parse(pct_decode(value, HREF_DECODING_ALLOWED))
        self._assign(self.from_components(**components._asdict()))

    @property
    def uri(self) -> str:
        """
        The IRI mapped to a URI, all characters that aren't allowed in URIs are
        percent-encoded as UTF-8 octets.
        """
        return pct_encode(self.href, URI_ENCODING_ALLOWED)

    # properties

    @property
    def is_absolute(self) -> bool:
        """
        Whether scheme, path and query are present and no fragment is.
        """
        return (
            self._scheme is not None
            and self._path is not None
            and self._query is not None
            and self._fragment is None
        )

    @property
    def is_relative(self) -> bool:
        """Whether the scheme is missing."""
        return self._scheme is None

    # resolution

    def resolve(
        self, base: IRISource, options: Optional[ResolutionOptions] = None
    ) -> IRI:
        """
        Resolves this reference against a base IRI and returns the target as new
        instance.

        .. attention::

            Other than specified in RFC 3986 the target's fragment is always cleared,
            unless the ``preserve_fragment`` option is set. A
            :class:`FragmentDiscardedWarning` is emitted when this drops a fragment.

        >>> str(IRI("../g?y").resolve("http://a/b/c/d;p?q"))
        'http://a/b/g?y'

        :param base: The base IRI, strings are parsed.
        :param options: The :class:`ResolutionOptions` to use.
        :raises InvalidBase: When the base has no scheme.
        """
        if isinstance(base, str):
            base = IRI(base)
        if base.is_relative:
            raise InvalidBase(base)

        target = resolve_components(
            self.components, base.components, options or DEFAULT_RESOLUTION_OPTIONS
        )
        return IRI.from_components(**target._asdict())


__all__ = (IRI.__name__,)
