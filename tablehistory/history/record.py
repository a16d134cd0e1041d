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
"""Records and snapshots of a tracked table.

A Record is an opaque keyed row: the id is used for lookups, and the payload is
only ever compared for equality. A Snapshot is the full state of the tracked table
at a single time step and holds at most one payload per id. Neither carries any
temporal information; time is attached by the history classes in history_row.py.
"""
from collections import Counter
from typing import (
    Any,
    Dict,
    Hashable,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

import attr

from tablehistory.common import attr_validators
from tablehistory.history.errors import MalformedSnapshotError


@attr.s(frozen=True)
class Record:
    """A single row of the tracked table."""

    record_id: Hashable = attr.ib(validator=attr_validators.is_hashable)
    payload: Any = attr.ib()


class Snapshot(Mapping[Hashable, Any]):
    """Immutable mapping from record id to payload representing the true state of the
    tracked table at one time step.

    Two snapshots are equal if they hold the same ids with equal payloads; the order
    in which records were provided is irrelevant.
    """

    def __init__(self, payloads_by_id: Optional[Mapping[Hashable, Any]] = None):
        self._payloads_by_id: Dict[Hashable, Any] = dict(payloads_by_id or {})

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> "Snapshot":
        """Builds a snapshot from |records|, throwing if any id appears more than
        once. The error lists every duplicated id, not just the first one found."""
        records = list(records)
        for record in records:
            if not isinstance(record, Record):
                raise TypeError(
                    f"Expected snapshot to contain Record objects, found "
                    f"{type(record)}."
                )
        payloads_by_id = {r.record_id: r.payload for r in records}
        if len(payloads_by_id) != len(records):
            id_counts = Counter(r.record_id for r in records)
            raise MalformedSnapshotError(
                _sorted_ids(i for i, count in id_counts.items() if count > 1)
            )
        return cls(payloads_by_id)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[Hashable, Any]]) -> "Snapshot":
        return cls.from_records(
            Record(record_id=record_id, payload=payload) for record_id, payload in pairs
        )

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls()

    def records(self) -> List[Record]:
        """Returns the records in this snapshot, sorted by id."""
        return [
            Record(record_id=record_id, payload=self._payloads_by_id[record_id])
            for record_id in _sorted_ids(self._payloads_by_id)
        ]

    def __getitem__(self, record_id: Hashable) -> Any:
        return self._payloads_by_id[record_id]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._payloads_by_id)

    def __len__(self) -> int:
        return len(self._payloads_by_id)

    def __repr__(self) -> str:
        return f"Snapshot({self._payloads_by_id!r})"


SnapshotLike = Union[Snapshot, Mapping[Hashable, Any], Iterable[Record]]


def as_snapshot(snapshot: SnapshotLike) -> Snapshot:
    """Returns |snapshot| if it is already a Snapshot. A mapping is read as id to
    payload. Anything else must be an iterable of records, and building a snapshot
    from it throws MalformedSnapshotError on duplicate ids."""
    if isinstance(snapshot, Snapshot):
        return snapshot
    if isinstance(snapshot, Mapping):
        return Snapshot(snapshot)
    return Snapshot.from_records(snapshot)


def _sorted_ids(ids: Iterable[Hashable]) -> List[Hashable]:
    return sorted(ids)  # type: ignore[type-var]
