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
"""Container for the difference slices produced by an ObservationStore."""
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from tablehistory.history.errors import NonContiguousDifferenceChainError
from tablehistory.history.history_row import DifferenceSlice, HistoryRow


class DifferenceChain:
    """An ordered run of difference slices with no gaps in time.

    The chain may start at any time step, which is what lets callers drop old
    slices once they no longer need to reconstruct the times those slices cover.
    Nothing is ever dropped unless drop_slices_through() is called.
    """

    def __init__(self, slices: Iterable[DifferenceSlice] = ()) -> None:
        self._slices: List[DifferenceSlice] = []
        # Kept across drop_slices_through() so appends stay contiguous even after
        # every slice has been dropped.
        self._latest_time: Optional[int] = None
        for difference_slice in slices:
            self.append(difference_slice)

    def append(self, difference_slice: DifferenceSlice) -> None:
        """Adds |difference_slice| to the end of the chain. Throws if it is not the
        slice for the time step right after the latest slice in the chain."""
        latest_time = self.latest_time
        if latest_time is not None and difference_slice.time != latest_time + 1:
            raise NonContiguousDifferenceChainError(
                expected_time=latest_time + 1, found_time=difference_slice.time
            )
        self._slices.append(difference_slice)
        self._latest_time = difference_slice.time

    @property
    def slices(self) -> Tuple[DifferenceSlice, ...]:
        return tuple(self._slices)

    @property
    def earliest_time(self) -> Optional[int]:
        return self._slices[0].time if self._slices else None

    @property
    def latest_time(self) -> Optional[int]:
        return self._latest_time

    @property
    def earliest_reconstructable_time(self) -> Optional[int]:
        """The earliest time step that can be reconstructed by combining this chain
        with the observation table at latest_time.

        The slice for time t closes off rows that were valid at t - 1, so a chain
        starting at t can reconstruct every time from t - 1 onward. A chain whose
        slices have all been dropped can only reconstruct latest_time.
        """
        earliest_time = self.earliest_time
        if earliest_time is None:
            return self.latest_time
        return max(earliest_time - 1, 1)

    def slices_after(self, time: int) -> List[DifferenceSlice]:
        """Returns the slices for every time step after |time|, i.e. the slices
        needed, along with the observation table, to reconstruct |time|."""
        earliest_time = self.earliest_time
        if earliest_time is None:
            return []
        # Slices are contiguous, so the slice for time t sits at t - earliest_time.
        return self._slices[max(time + 1 - earliest_time, 0) :]

    def rows_after(self, time: int) -> List[HistoryRow]:
        return [row for s in self.slices_after(time) for row in s.rows]

    def rows(self) -> List[HistoryRow]:
        return [row for s in self._slices for row in s.rows]

    def drop_slices_through(self, time: int) -> int:
        """Drops every slice for a time step at or before |time| and returns the
        number of slices dropped. Afterwards, the chain can no longer reconstruct
        any time before |time|.
        """
        remaining = self.slices_after(time)
        dropped_count = len(self._slices) - len(remaining)
        self._slices = remaining
        logging.info(
            "Dropped %s difference slice(s) through time [%s], %s remaining",
            dropped_count,
            time,
            len(remaining),
        )
        return dropped_count

    def __iter__(self) -> Iterator[DifferenceSlice]:
        return iter(self.slices)

    def __len__(self) -> int:
        return len(self._slices)
