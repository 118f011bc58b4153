"""
--------------------------------------------------------------------------------
<ribodesign project>
ribodesign/walker/errors.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations


class WalkerError(Exception):
    """Base exception for this package."""


class ConfigurationError(WalkerError):
    """Missing collaborators or unusable settings, detected at construction."""


class InvalidParameter(WalkerError, ValueError):
    """Out-of-range argument (non-positive length, empty alphabet, ...)."""
