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

"""These are the specific iriref exceptions and warnings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from _iriref.iri import IRI


class IRIError(Exception):
    pass


class InvalidCodePath(IRIError, RuntimeError):
    """Raised when a code path that is not expected to be executed is reached."""

    def __init__(self):  # pragma: no cover
        super().__init__(
            "An unintended path was taken through the code. Please report this bug."
        )


# components


class InvalidComponent(IRIError, ValueError):
    """
    Raised when a value that shall be assigned to one of an IRI's components doesn't
    match that component's production.
    """

    component: str = ""

    def __init__(self, value: Any, message: str | None = None):
        self.value = value
        super().__init__(message or f"Invalid {self.component}: {value!r}")


class InvalidScheme(InvalidComponent):
    component = "scheme"


class InvalidUserinfo(InvalidComponent):
    component = "userinfo"


class InvalidHost(InvalidComponent):
    component = "host"


class InvalidPort(InvalidComponent):
    """Raised for values that aren't base-10 integers in the range 0 to 65535."""

    component = "port"


class InvalidPath(InvalidComponent):
    component = "path"


class InvalidQuery(InvalidComponent):
    component = "query"


class InvalidFragment(InvalidComponent):
    component = "fragment"


# whole identifiers


class InvalidIRI(IRIError, ValueError):
    """Raised when a string can't be parsed as IRI reference."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid IRI: {value!r}")


class InvalidBase(IRIError, ValueError):
    """Raised when a relative IRI is used as base to resolve a reference against."""

    def __init__(self, base: IRI):
        self.base = base
        super().__init__(f"A base IRI must have a scheme, got {str(base)!r}.")


# warnings


class FragmentDiscardedWarning(UserWarning):
    """
    Emitted when :meth:`iriref.IRI.resolve` drops a reference's fragment from the
    resolved target.
    """

    pass


__all__ = (
    FragmentDiscardedWarning.__name__,
    IRIError.__name__,
    InvalidBase.__name__,
    InvalidCodePath.__name__,
    InvalidComponent.__name__,
    InvalidFragment.__name__,
    InvalidHost.__name__,
    InvalidIRI.__name__,
    InvalidPath.__name__,
    InvalidPort.__name__,
    InvalidQuery.__name__,
    InvalidScheme.__name__,
    InvalidUserinfo.__name__,
)
