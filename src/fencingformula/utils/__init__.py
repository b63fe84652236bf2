"""Shared helpers for Fencing Formula: logging and id generation."""

# Fencing Formula
# Copyright (C) 2025  Fencing Formula developers
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
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import uuid

PACKAGE_LOGGER = "fencingformula"


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger under the package's logger hierarchy.

    The package root logger gets a ``NullHandler`` the first time this is
    called. Records still propagate, so output is up to the application's
    own logging configuration.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        The configured logger
    """
    root = logging.getLogger(PACKAGE_LOGGER)
    if not root.handlers:
        root.addHandler(logging.NullHandler())

    return logging.getLogger(name)


def generate_id(prefix: str) -> str:
    """Generate a short unique id such as ``tournament-1a2b3c4d``."""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"
