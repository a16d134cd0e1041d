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
"""Rows of a history table and the difference slices built from them.

A history row is a record annotated with the half-open range of time steps
[valid_from, valid_to) during which it was the true value for its id. A row with
valid_to of None is open, i.e. still valid at the present time. A history table is
any collection of history rows; observation tables and difference slices are both
history tables with extra structure.
"""
from typing import Any, Hashable, Iterable, Iterator, List, Optional, Tuple

import attr

from tablehistory.common import attr_validators
from tablehistory.common.time_range import PotentiallyOpenTimeRange
from tablehistory.history.record import Record


@attr.s(frozen=True)
class HistoryRow:
    """A record along with the range of time steps during which it was valid."""

    valid_from: int = attr.ib(validator=attr_validators.is_time_step)
    valid_to: Optional[int] = attr.ib(validator=attr_validators.is_opt_time_step)
    record_id: Hashable = attr.ib(validator=attr_validators.is_hashable)
    payload: Any = attr.ib()

    def __attrs_post_init__(self) -> None:
        if self.valid_to is not None and self.valid_to <= self.valid_from:
            raise ValueError(
                f"History row for id [{self.record_id}] must end after it begins. "
                f"Found valid_from [{self.valid_from}], valid_to [{self.valid_to}]."
            )

    @classmethod
    def opened_at(cls, record_id: Hashable, payload: Any, time: int) -> "HistoryRow":
        return cls(valid_from=time, valid_to=None, record_id=record_id, payload=payload)

    @property
    def is_open(self) -> bool:
        return self.valid_to is None

    @property
    def time_range(self) -> PotentiallyOpenTimeRange:
        return PotentiallyOpenTimeRange(
            lower_bound_inclusive=self.valid_from,
            upper_bound_exclusive=self.valid_to,
        )

    def is_valid_at(self, time: int) -> bool:
        return time in self.time_range

    def closed_at(self, time: int) -> "HistoryRow":
        """Returns a copy of this open row that stops being valid at |time|."""
        if not self.is_open:
            raise ValueError(
                f"Cannot close history row for id [{self.record_id}] which is "
                f"already closed at [{self.valid_to}]."
            )
        return attr.evolve(self, valid_to=time)

    def as_record(self) -> Record:
        return Record(record_id=self.record_id, payload=self.payload)


HistoryTable = Tuple[HistoryRow, ...]


def _all_rows_close_at_slice_time(
    instance: "DifferenceSlice", _attribute: attr.Attribute, rows: HistoryTable
) -> None:
    for row in rows:
        if row.valid_to != instance.time:
            raise ValueError(
                f"Difference slice for time [{instance.time}] may only contain rows "
                f"closed at that time. Found row for id [{row.record_id}] with "
                f"valid_to [{row.valid_to}]."
            )


@attr.s(frozen=True)
class DifferenceSlice:
    """The rows closed off when the tracked table advanced to |time|: one row for
    every id whose payload changed or that was removed at that step, holding the
    value that was valid just before |time|.

    A slice is produced for every time step, even when nothing changed, so that a
    chain of slices can be indexed by time.
    """

    time: int = attr.ib(validator=attr_validators.is_time_step)
    rows: HistoryTable = attr.ib(
        factory=tuple,
        converter=tuple,
        validator=[attr_validators.is_tuple, _all_rows_close_at_slice_time],
    )

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def record_ids(self) -> List[Hashable]:
        return [row.record_id for row in self.rows]

    def __iter__(self) -> Iterator[HistoryRow]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


def _history_row_sort_key(row: HistoryRow) -> Tuple[Any, int, bool, int]:
    return (
        row.record_id,
        row.valid_from,
        row.valid_to is None,
        row.valid_to if row.valid_to is not None else 0,
    )


def sort_history_rows(rows: Iterable[HistoryRow]) -> List[HistoryRow]:
    """Sorts |rows| by id, then by the range of time they are valid for."""
    return sorted(rows, key=_history_row_sort_key)


def history_tables_equal(
    rows_1: Iterable[HistoryRow], rows_2: Iterable[HistoryRow]
) -> bool:
    """Returns True if the two collections hold the same rows, in any order.

    Payloads are only compared for equality, so they do not need to be hashable.
    """
    return sort_history_rows(rows_1) == sort_history_rows(rows_2)
