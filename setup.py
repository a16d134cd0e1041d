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
"""Packaging for the tablehistory library.

REQUIRED_PACKAGES are the external packages the library imports at runtime. Test
dependencies live in the "test" extra and are installed with
`pip install -e .[test]`.
"""
import setuptools

REQUIRED_PACKAGES = [
    "attrs",
    "cattrs",
    "more-itertools",
]

TEST_PACKAGES = [
    "hypothesis",
    "parameterized",
    "pytest",
]

setuptools.setup(
    name="tablehistory",
    version="1.0.0",
    description=(
        "Compressed, append-only history of a mutable keyed table with point in "
        "time queries"
    ),
    python_requires=">=3.9",
    install_requires=REQUIRED_PACKAGES,
    extras_require={"test": TEST_PACKAGES},
    packages=setuptools.find_packages(include=["tablehistory", "tablehistory.*"]),
)
