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
"""Incrementally compresses the history of a tracked table into an observation table
and a chain of difference slices.

The observation table holds one open history row per id in the latest snapshot,
where valid_from is the time step at which that id's current payload was set. Each
call to ObservationStore.advance() moves the store forward by exactly one time step
and returns the difference slice for that step: the rows closed off because their
id changed or was removed.

The store never keeps the slices it produces. Callers append them to a chain (see
difference_chain.py) and decide how long to retain them. At any time step t,

    observation table ∪ D_t ∪ D_(t-1) ∪ ... ∪ D_1

is exactly the history table that materialize_history() builds for the first t
snapshots.
"""
import logging
from types import MappingProxyType
from typing import Dict, Hashable, Iterable, Mapping, Optional, Tuple

import attr

from tablehistory.history.errors import HistoryInvariantError
from tablehistory.history.history_invariants import validate_history_invariants
from tablehistory.history.history_row import (
    DifferenceSlice,
    HistoryRow,
    HistoryTable,
    sort_history_rows,
)
from tablehistory.history.record import Snapshot, SnapshotLike, as_snapshot
from tablehistory.history.snapshot_diff import compute_snapshot_diff
from tablehistory.utils import environment


@attr.s(frozen=True)
class _ObservationState:
    """Everything a reader can see about the store, published as one value so that
    a reader observes either the state before an advance or the state after it."""

    time: int = attr.ib()
    observation: Mapping[Hashable, HistoryRow] = attr.ib()
    # The snapshot implied by |observation|, cached so it does not have to be
    # projected out of the observation table on every advance.
    snapshot: Snapshot = attr.ib()


class ObservationStore:
    """Owns the current observation table of a tracked table and advances it one
    snapshot at a time.

    Calls to advance() must be serialized by the caller. Reading observation,
    observation_rows, current_snapshot or current_time is safe while another thread
    advances the store: each call returns values from a single published state,
    and published observation tables are never mutated.
    """

    def __init__(self, check_invariants: Optional[bool] = None) -> None:
        self._state = _ObservationState(
            time=0,
            observation=MappingProxyType({}),
            snapshot=Snapshot.empty(),
        )
        self._check_invariants = (
            check_invariants
            if check_invariants is not None
            else environment.should_check_history_invariants()
        )

    @classmethod
    def from_history(
        cls,
        rows: Iterable[HistoryRow],
        current_time: Optional[int] = None,
        check_invariants: Optional[bool] = None,
    ) -> "ObservationStore":
        """Builds a store whose observation table is the set of open rows in the
        history table |rows|.

        If |current_time| is not provided, the store's time is the latest time step
        mentioned by any row. A history table does not record trailing time steps
        where nothing changed, so callers that know the true time should pass it.
        """
        rows = tuple(rows)
        store = cls(check_invariants=check_invariants)
        if store._check_invariants:
            validate_history_invariants(rows)

        latest_time = max(
            (
                row.valid_to if row.valid_to is not None else row.valid_from
                for row in rows
            ),
            default=0,
        )
        if current_time is None:
            current_time = latest_time
        elif current_time < latest_time:
            raise ValueError(
                f"Cannot bootstrap store at time [{current_time}] from history that "
                f"extends through time [{latest_time}]."
            )

        observation: Dict[Hashable, HistoryRow] = {}
        for row in rows:
            if not row.is_open:
                continue
            if row.record_id in observation:
                raise HistoryInvariantError(
                    [f"Found more than one open row for id [{row.record_id}]."]
                )
            observation[row.record_id] = row

        store._state = _ObservationState(
            time=current_time,
            observation=MappingProxyType(observation),
            snapshot=Snapshot(
                {record_id: row.payload for record_id, row in observation.items()}
            ),
        )
        logging.info(
            "Bootstrapped observation store at time [%s] with %s open row(s) from "
            "%s history row(s)",
            current_time,
            len(observation),
            len(rows),
        )
        return store

    @property
    def current_time(self) -> int:
        return self._state.time

    @property
    def observation(self) -> Mapping[Hashable, HistoryRow]:
        """Read-only mapping from id to that id's open history row."""
        return self._state.observation

    @property
    def observation_rows(self) -> HistoryTable:
        return tuple(sort_history_rows(self._state.observation.values()))

    @property
    def current_snapshot(self) -> Snapshot:
        return self._state.snapshot

    def advance(self, snapshot: SnapshotLike) -> DifferenceSlice:
        """Moves the store to the next time step, where |snapshot| is the new state of
        the tracked table, and returns the difference slice for that time step.

        The slice holds the previously open row, now closed at the new time step,
        for every id whose payload changed or that was removed. Ids that are new at
        this step or whose payload did not change contribute nothing. The slice is
        returned even if it is empty.

        |snapshot| may be a Snapshot, a mapping from id to payload, or an iterable of
        Records. The store keeps references to the payloads it is given, not copies,
        and changes are only detected by comparing the payloads of consecutive
        snapshots. A payload must therefore not be mutated after it has been handed
        to the store; pass a new object instead.

        Throws MalformedSnapshotError if |snapshot| contains duplicate ids, or
        TypeError if it holds anything other than Records. In both cases the store is
        left unchanged.
        """
        new_snapshot = as_snapshot(snapshot)
        previous_state = self._state
        time = previous_state.time + 1

        diff = compute_snapshot_diff(previous_state.snapshot, new_snapshot)

        # Copy-on-write: the published observation table is never mutated.
        observation = dict(previous_state.observation)
        closed_rows = []
        for record_id in diff.removed:
            closed_rows.append(observation.pop(record_id).closed_at(time))
        for record in diff.added_or_changed:
            previous_row = observation.get(record.record_id)
            if previous_row is not None:
                closed_rows.append(previous_row.closed_at(time))
            observation[record.record_id] = HistoryRow.opened_at(
                record.record_id, record.payload, time
            )

        difference_slice = DifferenceSlice(time=time, rows=closed_rows)

        if self._check_invariants:
            validate_history_invariants(
                list(observation.values()) + list(difference_slice.rows)
            )

        self._state = _ObservationState(
            time=time,
            observation=MappingProxyType(observation),
            snapshot=new_snapshot,
        )
        logging.debug(
            "Advanced observation store to time [%s]: %s added or changed, %s "
            "removed, %s row(s) in difference slice, %s row(s) in observation table",
            time,
            len(diff.added_or_changed),
            len(diff.removed),
            len(difference_slice),
            len(observation),
        )
        return difference_slice

    def advance_all(
        self, snapshots: Iterable[SnapshotLike]
    ) -> Tuple[DifferenceSlice, ...]:
        """Advances the store once per snapshot in |snapshots|, returning the
        difference slices in time order."""
        return tuple(self.advance(snapshot) for snapshot in snapshots)
