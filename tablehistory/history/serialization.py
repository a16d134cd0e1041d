# tablehistory - compressed, time-travelable history of a mutable keyed table
# Copyright (C) 2026 The tablehistory Authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
# =============================================================================
"""Helper functions to convert history rows and difference slices to and from
JSON-compatible dicts, for use by whatever layer persists them.

Record ids and payloads are passed through untouched, so they must already be JSON
compatible if the dicts are going to be written as JSON.
"""
from typing import Any, Dict, Hashable

import cattrs

from tablehistory.history.history_row import DifferenceSlice, HistoryRow


def _build_converter() -> cattrs.Converter:
    converter = cattrs.Converter()
    # Record ids are opaque and pass through as-is in both directions.
    converter.register_structure_hook_func(
        lambda t: t is Hashable, lambda value, _: value
    )
    converter.register_unstructure_hook_func(
        lambda t: t is Hashable, lambda value: value
    )
    return converter


_CONVERTER = _build_converter()


def history_row_to_json_dict(row: HistoryRow) -> Dict[str, Any]:
    return _CONVERTER.unstructure(row)


def history_row_from_json_dict(row_dict: Dict[str, Any]) -> HistoryRow:
    return _CONVERTER.structure(row_dict, HistoryRow)


def difference_slice_to_json_dict(difference_slice: DifferenceSlice) -> Dict[str, Any]:
    """Converts |difference_slice| to a dict of the form
    {"time": <int>, "rows": [<history row dict>, ...]}."""
    return _CONVERTER.unstructure(difference_slice)


def difference_slice_from_json_dict(slice_dict: Dict[str, Any]) -> DifferenceSlice:
    return _CONVERTER.structure(slice_dict, DifferenceSlice)
