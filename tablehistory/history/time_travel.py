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
"""Reconstructs the snapshot of a tracked table that was valid at a past time step.

at_time() works on any collection of history rows: a full history table, or an
observation table combined with difference slices. In the latter case the rows must
include the observation table and every slice for a time step after the queried
time, through the time of the observation table. Missing slices are not detected;
the result will silently be stale or incomplete. Use reconstruct_snapshot() to let
a DifferenceChain pick the right slices.
"""
from typing import Dict, Hashable, Iterable, Optional, Sequence

from tablehistory.history.difference_chain import DifferenceChain
from tablehistory.history.errors import (
    NonContiguousDifferenceChainError,
    TimeOutOfRangeError,
)
from tablehistory.history.history_row import HistoryRow
from tablehistory.history.observation_store import ObservationStore
from tablehistory.history.record import Snapshot
from tablehistory.utils import environment


def at_time(
    rows: Iterable[HistoryRow],
    queried_time: int,
    validate_time_range: Optional[bool] = None,
) -> Snapshot:
    """Returns the snapshot valid at |queried_time| according to |rows|.

    Keeps every row where valid_from <= queried_time < valid_to (or valid_to is
    None). If several rows for the same id survive, which can only happen when
    overlapping slices are passed in more than once, the row with the latest
    valid_from wins, and among rows with equal valid_from the first one in |rows|
    wins.

    If |validate_time_range| is True, throws a TimeOutOfRangeError when |rows| is
    empty or |queried_time| precedes every row in |rows|. If it is None, the
    TABLEHISTORY_VALIDATE_QUERY_TIME environment variable decides.
    """
    if validate_time_range is None:
        validate_time_range = environment.should_validate_query_time()
    if validate_time_range:
        rows = tuple(rows)
        _validate_queried_time(rows, queried_time)

    latest_row_by_id: Dict[Hashable, HistoryRow] = {}
    for row in rows:
        if not row.is_valid_at(queried_time):
            continue
        current = latest_row_by_id.get(row.record_id)
        if current is None or row.valid_from > current.valid_from:
            latest_row_by_id[row.record_id] = row

    return Snapshot(
        {record_id: row.payload for record_id, row in latest_row_by_id.items()}
    )


def _validate_queried_time(rows: Sequence[HistoryRow], queried_time: int) -> None:
    if not rows:
        raise TimeOutOfRangeError(queried_time, earliest_time=None)
    earliest_time = min(row.valid_from for row in rows)
    if queried_time < earliest_time:
        raise TimeOutOfRangeError(queried_time, earliest_time=earliest_time)


def reconstruct_snapshot(
    store: ObservationStore, chain: DifferenceChain, queried_time: int
) -> Snapshot:
    """Returns the snapshot valid at |queried_time|, using the store's observation
    table and exactly the slices in |chain| that are needed for that time.

    Throws if |chain| does not end at the store's current time, or if
    |queried_time| is outside the range of times the store and chain can
    reconstruct.
    """
    store_time = store.current_time
    if store_time < 1:
        raise TimeOutOfRangeError(queried_time, earliest_time=None)

    if chain.latest_time is None:
        earliest_time = store_time
    elif chain.latest_time != store_time:
        raise NonContiguousDifferenceChainError(
            expected_time=store_time, found_time=chain.latest_time
        )
    else:
        earliest_time = chain.earliest_reconstructable_time or store_time

    if not earliest_time <= queried_time <= store_time:
        raise TimeOutOfRangeError(
            queried_time, earliest_time=earliest_time, latest_time=store_time
        )

    rows = list(store.observation.values()) + chain.rows_after(queried_time)
    return at_time(rows, queried_time, validate_time_range=False)
