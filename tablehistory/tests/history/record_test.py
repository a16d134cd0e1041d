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
"""Tests for record.py"""
import unittest

from tablehistory.history.errors import MalformedSnapshotError
from tablehistory.history.record import Record, Snapshot, as_snapshot


class TestSnapshot(unittest.TestCase):
    """Tests for Snapshot"""

    def test_from_records(self) -> None:
        snapshot = Snapshot.from_records(
            [Record(record_id=2, payload="b"), Record(record_id=1, payload="a")]
        )

        self.assertEqual(2, len(snapshot))
        self.assertEqual("a", snapshot[1])
        self.assertEqual("b", snapshot[2])
        self.assertEqual(
            [Record(record_id=1, payload="a"), Record(record_id=2, payload="b")],
            snapshot.records(),
        )

    def test_equality_ignores_order(self) -> None:
        self.assertEqual(
            Snapshot.from_pairs([(1, "a"), (2, "b")]),
            Snapshot.from_pairs([(2, "b"), (1, "a")]),
        )
        self.assertEqual(Snapshot({1: "a"}), {1: "a"})
        self.assertNotEqual(Snapshot({1: "a"}), Snapshot({1: "b"}))
        self.assertNotEqual(Snapshot({1: "a"}), Snapshot({1: "a", 2: "b"}))

    def test_payload_equality_is_by_value(self) -> None:
        self.assertEqual(
            Snapshot({1: {"name": "x", "tags": ["a"]}}),
            Snapshot({1: {"name": "x", "tags": ["a"]}}),
        )

    def test_duplicate_ids(self) -> None:
        with self.assertRaises(MalformedSnapshotError) as e:
            Snapshot.from_pairs([(3, "a"), (1, "b"), (3, "c"), (1, "d"), (2, "e")])

        self.assertEqual([1, 3], e.exception.duplicate_ids)
        self.assertEqual(
            "Snapshot contains duplicate record ids: [1, 3]", str(e.exception)
        )

    def test_duplicate_ids_same_payload(self) -> None:
        with self.assertRaises(MalformedSnapshotError):
            Snapshot.from_pairs([(1, "a"), (1, "a")])

    def test_empty(self) -> None:
        self.assertEqual(0, len(Snapshot.empty()))
        self.assertEqual(Snapshot.empty(), Snapshot.from_records([]))

    def test_as_snapshot(self) -> None:
        snapshot = Snapshot({1: "a"})
        self.assertIs(snapshot, as_snapshot(snapshot))
        self.assertEqual(snapshot, as_snapshot([Record(record_id=1, payload="a")]))
        with self.assertRaises(MalformedSnapshotError):
            as_snapshot(
                [Record(record_id=1, payload="a"), Record(record_id=1, payload="b")]
            )

    def test_as_snapshot_from_mapping(self) -> None:
        snapshot = as_snapshot({2: "b", 1: "a"})

        self.assertIsInstance(snapshot, Snapshot)
        self.assertEqual(Snapshot.from_pairs([(1, "a"), (2, "b")]), snapshot)
        self.assertEqual(Snapshot.empty(), as_snapshot({}))

    def test_non_record_items(self) -> None:
        with self.assertRaisesRegex(TypeError, "to contain Record objects"):
            as_snapshot([Record(record_id=1, payload="a"), (2, "b")])

    def test_unhashable_id(self) -> None:
        with self.assertRaisesRegex(ValueError, "to be hashable"):
            Record(record_id=[1], payload="a")
