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
"""Ranges of discrete time steps where the end of the range could be open."""
from typing import List, Optional, Sequence

import attr

from tablehistory.common import attr_validators


@attr.s(frozen=True)
class PotentiallyOpenTimeRange:
    """Object representing a range of time steps [lower, upper) where the upper
    bound could be null (open), meaning the range is valid through the present."""

    lower_bound_inclusive: int = attr.ib(validator=attr_validators.is_time_step)
    upper_bound_exclusive: Optional[int] = attr.ib(
        validator=attr_validators.is_opt_time_step
    )

    @property
    def is_open(self) -> bool:
        return self.upper_bound_exclusive is None

    @property
    def non_optional_upper_bound_exclusive(self) -> int:
        if self.upper_bound_exclusive is None:
            raise ValueError("Expected closed range, found open range.")
        return self.upper_bound_exclusive

    def __contains__(self, time: int) -> bool:
        """Returns True if |time| is at or after the lower bound and strictly before
        the upper bound, if there is one."""
        return self.lower_bound_inclusive <= time and (
            self.is_open or time < self.non_optional_upper_bound_exclusive
        )

    def overlaps(self, other: "PotentiallyOpenTimeRange") -> bool:
        """Returns True if there is at least one time step in both ranges."""
        return (
            other.lower_bound_inclusive in self or self.lower_bound_inclusive in other
        )

    def __attrs_post_init__(self) -> None:
        if (
            not self.is_open
            and self.lower_bound_inclusive >= self.non_optional_upper_bound_exclusive
        ):
            raise ValueError(
                f"Time steps must be in strictly increasing order. "
                f"Current order: {self.lower_bound_inclusive}, "
                f"{self.non_optional_upper_bound_exclusive}"
            )


def get_overlapping_time_ranges(
    time_ranges: Sequence[PotentiallyOpenTimeRange],
) -> List[List[PotentiallyOpenTimeRange]]:
    """Returns every pair of ranges in |time_ranges| that share a time step, in
    order of their lower bounds."""
    sorted_ranges = sorted(time_ranges, key=lambda r: r.lower_bound_inclusive)
    overlapping = []
    for i, time_range in enumerate(sorted_ranges):
        for other in sorted_ranges[i + 1 :]:
            # Later ranges start no earlier than |other|, so none of them can
            # overlap either.
            if not time_range.overlaps(other):
                break
            overlapping.append([time_range, other])
    return overlapping

