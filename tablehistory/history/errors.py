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
"""Contains errors for the history directory."""
from typing import Hashable, Optional, Sequence


class HistoryError(Exception):
    """Base class for all errors raised while building or querying table history."""


class MalformedSnapshotError(HistoryError):
    """Raised when a snapshot contains more than one record with the same id."""

    def __init__(self, duplicate_ids: Sequence[Hashable]):
        self.duplicate_ids = list(duplicate_ids)
        ids_str = ", ".join(repr(i) for i in self.duplicate_ids)
        super().__init__(f"Snapshot contains duplicate record ids: [{ids_str}]")


class TimeOutOfRangeError(HistoryError):
    """Raised when a queried time cannot be reconstructed from the rows that were
    provided."""

    def __init__(
        self,
        queried_time: int,
        earliest_time: Optional[int],
        latest_time: Optional[int] = None,
    ):
        self.queried_time = queried_time
        self.earliest_time = earliest_time
        self.latest_time = latest_time
        if earliest_time is None:
            msg = f"Cannot reconstruct time [{queried_time}] from an empty history."
        elif latest_time is None:
            msg = (
                f"Cannot reconstruct time [{queried_time}]: the earliest "
                f"reconstructable time is [{earliest_time}]."
            )
        else:
            msg = (
                f"Cannot reconstruct time [{queried_time}]: reconstructable times "
                f"are [{earliest_time}, {latest_time}]."
            )
        super().__init__(msg)


class NonContiguousDifferenceChainError(HistoryError):
    """Raised when a difference slice is appended to a chain out of order."""

    def __init__(self, expected_time: int, found_time: int):
        self.expected_time = expected_time
        self.found_time = found_time
        super().__init__(
            f"Expected difference slice for time [{expected_time}], "
            f"found slice for time [{found_time}]."
        )


class HistoryInvariantError(HistoryError):
    """Raised when a history table violates one or more history invariants."""

    def __init__(self, violations: Sequence[str]):
        self.violations = list(violations)
        violations_str = "\n".join(f"  - {v}" for v in self.violations)
        super().__init__(
            f"Found [{len(self.violations)}] history invariant violation(s):"
            f"\n{violations_str}"
        )
