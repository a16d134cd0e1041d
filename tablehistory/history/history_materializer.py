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
"""Method to build the full history table for a sequence of snapshots.

This is the reference implementation of a history table. It uses the diff engine
only to find the time steps at which each id appears, disappears or changes
payload. Rows are then cut per id between consecutive boundaries, reading
payloads straight from the snapshots, without the open-row bookkeeping the
ObservationStore does. This makes it usable as an independent check on the
store's output, and for migrating a sequence of full snapshots into the
compressed representation (see ObservationStore.from_history).
"""
import logging
from typing import Dict, Hashable, Iterable, List, Optional

from tablehistory.history.history_row import HistoryRow, HistoryTable
from tablehistory.history.record import Snapshot, SnapshotLike, as_snapshot
from tablehistory.history.snapshot_diff import compute_snapshot_diff


def materialize_history(snapshots: Iterable[SnapshotLike]) -> HistoryTable:
    """Returns the history table for |snapshots|, where the first snapshot is the
    state of the table at time 1, the second at time 2, and so on.

    Every id gets a row starting at the time step where it appears or its payload
    changes, ending at the time step where it disappears or its payload changes
    again. The row of an id still present in the last snapshot is left open. Rows
    are grouped by id.
    """
    all_snapshots = [as_snapshot(snapshot) for snapshot in snapshots]

    boundaries_by_id: Dict[Hashable, List[int]] = {}
    previous_snapshot = Snapshot.empty()
    for time, snapshot in enumerate(all_snapshots, start=1):
        for record_id in compute_snapshot_diff(previous_snapshot, snapshot).touched_ids:
            boundaries_by_id.setdefault(record_id, []).append(time)
        previous_snapshot = snapshot

    rows: List[HistoryRow] = []
    for record_id, boundaries in boundaries_by_id.items():
        rows.extend(_history_rows_for_id(record_id, boundaries, all_snapshots))

    logging.info(
        "Materialized history for %s snapshot(s): %s closed row(s), %s open row(s)",
        len(all_snapshots),
        sum(1 for row in rows if not row.is_open),
        sum(1 for row in rows if row.is_open),
    )
    return tuple(rows)


def _history_rows_for_id(
    record_id: Hashable, boundaries: List[int], snapshots: List[Snapshot]
) -> List[HistoryRow]:
    """Between two consecutive boundaries |record_id| is either absent throughout or
    present with a single payload, which is the payload at the first of the two."""
    valid_tos: List[Optional[int]] = [*boundaries[1:], None]
    rows = []
    for valid_from, valid_to in zip(boundaries, valid_tos):
        snapshot = snapshots[valid_from - 1]
        if record_id in snapshot:
            rows.append(
                HistoryRow(
                    valid_from=valid_from,
                    valid_to=valid_to,
                    record_id=record_id,
                    payload=snapshot[record_id],
                )
            )
    return rows
