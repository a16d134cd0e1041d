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
"""Tests for serialization.py"""
import json
import unittest

from tablehistory.history.history_row import DifferenceSlice, HistoryRow
from tablehistory.history.serialization import (
    difference_slice_from_json_dict,
    difference_slice_to_json_dict,
    history_row_from_json_dict,
    history_row_to_json_dict,
)


class TestSerialization(unittest.TestCase):
    """Tests for converting history rows and slices to and from JSON dicts"""

    def test_history_row_to_json_dict(self) -> None:
        row = HistoryRow(valid_from=2, valid_to=None, record_id="x", payload="b")

        self.assertEqual(
            {"valid_from": 2, "valid_to": None, "record_id": "x", "payload": "b"},
            history_row_to_json_dict(row),
        )

    def test_history_row_from_json_dict(self) -> None:
        row_dict = {
            "valid_from": 1,
            "valid_to": 3,
            "record_id": 7,
            "payload": {"name": "a", "count": 2},
        }

        self.assertEqual(
            HistoryRow(
                valid_from=1,
                valid_to=3,
                record_id=7,
                payload={"name": "a", "count": 2},
            ),
            history_row_from_json_dict(row_dict),
        )

    def test_difference_slice_through_json(self) -> None:
        difference_slice = DifferenceSlice(
            time=4,
            rows=[
                HistoryRow(valid_from=3, valid_to=4, record_id=1, payload="c"),
                HistoryRow(valid_from=1, valid_to=4, record_id=2, payload=["d", 1]),
            ],
        )

        slice_dict = difference_slice_to_json_dict(difference_slice)
        self.assertEqual(4, slice_dict["time"])
        self.assertEqual(
            [
                {"valid_from": 3, "valid_to": 4, "record_id": 1, "payload": "c"},
                {"valid_from": 1, "valid_to": 4, "record_id": 2, "payload": ["d", 1]},
            ],
            list(slice_dict["rows"]),
        )

        # JSON turns every sequence into a list
        json_dict = json.loads(json.dumps(slice_dict))
        self.assertEqual(difference_slice, difference_slice_from_json_dict(json_dict))

    def test_empty_difference_slice(self) -> None:
        self.assertEqual(
            DifferenceSlice(time=1),
            difference_slice_from_json_dict({"time": 1, "rows": []}),
        )

    def test_invalid_row(self) -> None:
        with self.assertRaises(Exception):
            history_row_from_json_dict(
                {"valid_from": 3, "valid_to": 2, "record_id": 1, "payload": "a"}
            )
