"""Exceptions raised by orthopack."""

from __future__ import annotations


class OrthopackError(Exception):
    """Base class for all orthopack errors."""


class CompactionError(OrthopackError):
    """Raised when a constraint graph has no feasible coordinate assignment.

    This happens only for a cycle of positive total length, which means the
    constraint graph was built incorrectly upstream.
    """


class PackingError(OrthopackError):
    """Raised when a packer cannot place every component box."""
