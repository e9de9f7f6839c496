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
Reference resolution as defined in
`RFC 3986, section 5 <https://tools.ietf.org/html/rfc3986#section-5>`_.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, NamedTuple, Optional

from _iriref.exceptions import FragmentDiscardedWarning

if TYPE_CHECKING:
    from typing import Final

    from _iriref.grammar import IRIComponents


class ResolutionOptions(NamedTuple):
    """
    The configuration options that define how references are resolved against a base.
    """

    preserve_fragment: bool = False
    """
    Let the resolved target carry the reference's fragment as RFC 3986 does. With the
    default the target's fragment is always cleared and a
    :class:`FragmentDiscardedWarning` is emitted when a reference's fragment is
    dropped.  Default: :obj:`False`.
    """
    strict: bool = True
    """
    With :obj:`False` a reference's scheme is ignored if it is the same as the base's
    one, as in the backward compatible mode of RFC 3986, section 5.2.2.
    Default: :obj:`True`.
    """


DEFAULT_RESOLUTION_OPTIONS: Final = ResolutionOptions()


def merge_paths(base_path: Optional[str], relative_path: str) -> str:
    """
    Merges a relative path with a base's path.

    >>> merge_paths("/b/c/d;p", "g")
    '/b/c/g'
    >>> merge_paths(None, "g")
    '/g'
    """
    if not base_path:
        return "/" + relative_path
    # a base path without any slash is replaced as a whole
    head = base_path[: base_path.rfind("/") + 1] or "/"
    return head + relative_path


def remove_dot_segments(path: str) -> str:
    """
    Interprets and removes the special ``.`` and ``..`` segments from a path.

    >>> remove_dot_segments("/a/b/c/./../../g")
    '/a/g'
    >>> remove_dot_segments("mid/content=5/../6")
    'mid/6'
    """
    segments: list[str] = []

    while path:
        if path.startswith("../"):
            path = path[3:]
        elif path.startswith("./"):
            path = path[2:]
        elif path.startswith("/./"):
            path = path[2:]
        elif path == "/.":
            path = "/"
        elif path.startswith("/../") or path == "/..":
            path = "/" + path[4:]
            if segments:
                segments.pop()
        elif path in (".", ".."):
            path = ""
        else:
            end = path.find("/", 1)
            if end == -1:
                end = len(path)
            segments.append(path[:end])
            path = path[end:]

    return "".join(segments)


def resolve_components(
    reference: IRIComponents,
    base: IRIComponents,
    options: ResolutionOptions = DEFAULT_RESOLUTION_OPTIONS,
) -> IRIComponents:
    """
    Determines the components of a reference's target. The ``base`` must have a
    scheme, the returned components aren't normalized.
    """
    assert base.scheme is not None

    scheme = reference.scheme
    if not options.strict and scheme == base.scheme:
        scheme = None

    if scheme is not None:
        target = reference._replace(path=remove_dot_segments(reference.path or ""))

    elif reference.host is not None:
        target = reference._replace(
            scheme=base.scheme, path=remove_dot_segments(reference.path or "")
        )

    elif reference.path is None:
        target = base._replace(
            query=base.query if reference.query is None else reference.query
        )

    else:
        if reference.path.startswith("/"):
            path = remove_dot_segments(reference.path)
        else:
            path = remove_dot_segments(merge_paths(base.path, reference.path))
        target = base._replace(path=path, query=reference.query)

    if options.preserve_fragment:
        return target._replace(fragment=reference.fragment)

    if reference.fragment is not None:
        warnings.warn(
            f"The fragment {reference.fragment!r} is discarded from the resolved "
            "target. Use ResolutionOptions(preserve_fragment=True) to keep it.",
            category=FragmentDiscardedWarning,
        )
    return target._replace(fragment=None)


__all__ = (
    ResolutionOptions.__name__,
    merge_paths.__name__,
    remove_dot_segments.__name__,
    resolve_components.__name__,
)
