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
"""Contains helper aliases and functions for attrs validators that can be passed to
the `validator=` arg of any attr field. For example:

@attr.s
class MyClass:
  valid_from: int = attr.ib(validator=is_time_step)
  valid_to: Optional[int] = attr.ib(validator=is_opt_time_step)
"""
from collections.abc import Hashable
from typing import Any, Optional

import attr


def is_time_step(_instance: Any, attribute: attr.Attribute, value: int) -> None:
    """Time steps are positive integers. Booleans are rejected even though they are
    ints in Python."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(
            f"Expected [{attribute.name}] to be an int time step, found {type(value)}."
        )
    if value < 1:
        raise ValueError(
            f"Expected [{attribute.name}] to be a positive time step, found [{value}]."
        )


def is_opt_time_step(
    instance: Any, attribute: attr.Attribute, value: Optional[int]
) -> None:
    if value is not None:
        is_time_step(instance, attribute, value)


def is_hashable(_instance: Any, attribute: attr.Attribute, value: Any) -> None:
    if not isinstance(value, Hashable):
        raise ValueError(
            f"Expected [{attribute.name}] to be hashable, found {type(value)}."
        )


is_tuple = attr.validators.instance_of(tuple)
