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
import sys
from typing import TYPE_CHECKING, TypeAlias, Union

if TYPE_CHECKING:
    from _iriref.iri import IRI


if sys.version_info < (3, 11):  # DROPWITH Python 3.10
    from typing_extensions import Self
else:
    from typing import Self


AllowedPattern: TypeAlias = Union[str, re.Pattern[str], None]  # noqa: UNT001
"""
Defines the characters that may appear literally in percent-encoded text. Either a
pattern that may refer to the grammar's productions as ``{name}``, a compiled regular
expression or :obj:`None` for the default ``{iunreserved}``. A pattern is matched
against single characters.
"""

IRISource: TypeAlias = Union[str, "IRI"]  # noqa: UNT001


__all__ = (
    "AllowedPattern",
    "IRISource",
    "Self",
)
