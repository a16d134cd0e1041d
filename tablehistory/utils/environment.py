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
"""Tools for working with environment variables.

tablehistory has no configuration file. The few behaviors that can be toggled
without changing call sites are read from the environment here; any explicit
argument passed to a function or constructor takes precedence.
"""
import os
from typing import Optional

import tablehistory

# When "true", at_time() validates the queried time against the rows it is given
# unless the caller says otherwise.
VALIDATE_QUERY_TIME_ENV_VAR = "TABLEHISTORY_VALIDATE_QUERY_TIME"

# When "true", the observation store validates history invariants after every
# advance. Defaults to on in tests, off otherwise.
CHECK_INVARIANTS_ENV_VAR = "TABLEHISTORY_CHECK_INVARIANTS"

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no", ""}


def get_bool_env_var(name: str) -> Optional[bool]:
    """Returns the boolean value of the environment variable |name|, or None if it
    is not set. Throws if the variable is set to something that is not a boolean.
    """
    value = os.environ.get(name)
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(
        f"Expected a boolean value for environment variable [{name}], "
        f"found [{value}]."
    )


def in_test() -> bool:
    """Check whether we are running in a test.

    Only the flag set in conftest.py counts, so importing unittest outside of
    pytest does not turn on the test defaults. Other test runners can set the
    environment variables above instead.
    """
    return bool(getattr(tablehistory, "called_from_test", False))


def should_validate_query_time() -> bool:
    return bool(get_bool_env_var(VALIDATE_QUERY_TIME_ENV_VAR))


def should_check_history_invariants() -> bool:
    configured = get_bool_env_var(CHECK_INVARIANTS_ENV_VAR)
    if configured is not None:
        return configured
    return in_test()
