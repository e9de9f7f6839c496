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
*iriref* is a library to parse, validate, normalize, serialize and resolve
Internationalized Resource Identifiers as specified in RFC 3987 and RFC 3986.
"""

from __future__ import annotations

from _iriref.codec import normalize_percent_encoding, pct_decode, pct_encode
from _iriref.exceptions import (
    FragmentDiscardedWarning,
    InvalidBase,
    InvalidComponent,
    InvalidFragment,
    InvalidHost,
    InvalidIRI,
    InvalidPath,
    InvalidPort,
    InvalidQuery,
    InvalidScheme,
    InvalidUserinfo,
    IRIError,
)
from _iriref.grammar import IRIComponents
from _iriref.iri import IRI
from _iriref.resolver import ResolutionOptions, merge_paths, remove_dot_segments


__all__ = (
    FragmentDiscardedWarning.__name__,
    IRI.__name__,
    IRIComponents.__name__,
    IRIError.__name__,
    InvalidBase.__name__,
    InvalidComponent.__name__,
    InvalidFragment.__name__,
    InvalidHost.__name__,
    InvalidIRI.__name__,
    InvalidPath.__name__,
    InvalidPort.__name__,
    InvalidQuery.__name__,
    InvalidScheme.__name__,
    InvalidUserinfo.__name__,
    ResolutionOptions.__name__,
    merge_paths.__name__,
    normalize_percent_encoding.__name__,
    pct_decode.__name__,
    pct_encode.__name__,
    remove_dot_segments.__name__,
)
