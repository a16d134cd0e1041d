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

"""Custom configuration for how pytest should run."""
from typing import List

from _pytest.config import Config
from _pytest.config.argparsing import Parser
from _pytest.nodes import Item

import tablehistory


def pytest_configure(config: Config) -> None:
    tablehistory.called_from_test = True
    config.addinivalue_line(
        "markers", "property_based: for tests that generate many random histories."
    )


def pytest_unconfigure() -> None:
    del tablehistory.called_from_test


def pytest_addoption(parser: Parser) -> None:
    group = parser.getgroup("tablehistory")
    group.addoption(
        "--skip-property-based",
        dest="skip_property_based",
        action="store_true",
        default=False,
        help="Deselect tests marked with property_based",
    )


def pytest_collection_modifyitems(config: Config, items: List[Item]) -> None:
    """Hook for selecting which tests should be executed
    Deselects property based tests if using the `--skip-property-based` option
    """
    if not config.getoption("skip_property_based"):
        return

    selected = [item for item in items if "property_based" not in item.keywords]
    deselected = [item for item in items if "property_based" in item.keywords]
    if deselected:
        config.hook.pytest_deselected(items=deselected)
    items[:] = selected
