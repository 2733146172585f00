# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Text codec for matrices: `[[a,b,c],[d,e,f]]`, an array of arrays with no
whitespace. The text is JSON, extended with the `Infinity` / `NaN` tokens
that `json.loads` accepts, so infinite cells of a singular inverse survive
a round trip. NaN cells do not: they are read back as 0 like any other
invalid cell.
"""

import json
from typing import Iterable, List

from .utils import format_cell


def dumps(rows: Iterable[Iterable[float]]) -> str:
    """Render nested rows of floats as `[[...],[...]]`."""
    return "[" + ",".join(
        "[" + ",".join(format_cell(float(x)) for x in row) + "]" for row in rows
    ) + "]"


def loads(text: str) -> List:
    """
    Decode matrix text into nested Python lists.

    Raises
    ------
    json.JSONDecodeError : if `text` is not valid JSON.
    TypeError : if the decoded value is not an array.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise TypeError(f"expected a JSON array, got {type(data).__name__}")
    return data
