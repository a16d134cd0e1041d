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
"""Functionality for validating that a history table satisfies the invariants that
make time travel queries well defined.

For every id in a history table:
1) No two rows are valid at the same time step.
2) At most one row is open.
3) Two rows where one ends exactly when the next begins have different payloads,
    i.e. there is no spurious history.

These hold by construction for anything built by the observation store or the
history materializer. The checks here are meant for validation tooling, for
history tables loaded from elsewhere, and for tests.
"""
import logging
from collections import defaultdict
from typing import Dict, Hashable, Iterable, List

from more_itertools import pairwise

from tablehistory.common.time_range import get_overlapping_time_ranges
from tablehistory.history.errors import HistoryInvariantError
from tablehistory.history.history_row import HistoryRow, sort_history_rows


def find_history_invariant_violations(rows: Iterable[HistoryRow]) -> List[str]:
    """Returns a human-readable description of every invariant violation in |rows|.
    Returns an empty list if the rows form a valid history table."""
    rows_by_id: Dict[Hashable, List[HistoryRow]] = defaultdict(list)
    for row in sort_history_rows(rows):
        rows_by_id[row.record_id].append(row)

    violations: List[str] = []
    for record_id, id_rows in rows_by_id.items():
        open_rows = [row for row in id_rows if row.is_open]
        if len(open_rows) > 1:
            violations.append(
                f"Found [{len(open_rows)}] open rows for id [{record_id}], starting "
                f"at {[row.valid_from for row in open_rows]}."
            )

        for range_1, range_2 in get_overlapping_time_ranges(
            [row.time_range for row in id_rows]
        ):
            violations.append(
                f"Found overlapping rows for id [{record_id}]: "
                f"[{range_1.lower_bound_inclusive}, {range_1.upper_bound_exclusive}) "
                f"and [{range_2.lower_bound_inclusive}, "
                f"{range_2.upper_bound_exclusive})."
            )

        for previous_row, next_row in pairwise(id_rows):
            if (
                previous_row.valid_to == next_row.valid_from
                and previous_row.payload == next_row.payload
            ):
                violations.append(
                    f"Found spurious history for id [{record_id}]: the row valid "
                    f"from [{previous_row.valid_from}] and the row valid from "
                    f"[{next_row.valid_from}] have the same payload."
                )
    return violations


def validate_history_invariants(rows: Iterable[HistoryRow]) -> None:
    """Throws a HistoryInvariantError listing every invariant violation in |rows|."""
    violations = find_history_invariant_violations(rows)
    if not violations:
        return
    for violation in violations:
        logging.error("History invariant violation: %s", violation)
    raise HistoryInvariantError(violations)
