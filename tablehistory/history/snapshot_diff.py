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
"""Computes the difference between two snapshots of the tracked table."""
from typing import FrozenSet, Hashable, Tuple

import attr

from tablehistory.history.record import Record, SnapshotLike, as_snapshot


@attr.s(frozen=True)
class SnapshotDiff:
    """The changes needed to go from one snapshot to the next.

    Attributes:
        added_or_changed: Records in the new snapshot whose (id, payload) pair did
            not exist in the old snapshot: either the id is new or its payload
            differs.
        removed: Ids that exist in the old snapshot but not in the new one.
    """

    added_or_changed: Tuple[Record, ...] = attr.ib(converter=tuple)
    removed: FrozenSet[Hashable] = attr.ib(converter=frozenset)

    def __attrs_post_init__(self) -> None:
        both = {r.record_id for r in self.added_or_changed} & self.removed
        if both:
            raise ValueError(
                f"Ids cannot be both removed and added or changed: {sorted(both)}"
            )

    @property
    def touched_ids(self) -> FrozenSet[Hashable]:
        """Every id that needs a new interval boundary written."""
        return frozenset(r.record_id for r in self.added_or_changed) | self.removed

    @property
    def is_empty(self) -> bool:
        return not self.added_or_changed and not self.removed


def compute_snapshot_diff(old: SnapshotLike, new: SnapshotLike) -> SnapshotDiff:
    """Returns the records added or changed and the ids removed between |old| and
    |new|. Payloads are compared with ==, never by identity.
    """
    old_snapshot = as_snapshot(old)
    new_snapshot = as_snapshot(new)

    added_or_changed = [
        Record(record_id=record_id, payload=payload)
        for record_id, payload in new_snapshot.items()
        if record_id not in old_snapshot or old_snapshot[record_id] != payload
    ]
    removed = [
        record_id for record_id in old_snapshot if record_id not in new_snapshot
    ]
    return SnapshotDiff(added_or_changed=added_or_changed, removed=removed)
