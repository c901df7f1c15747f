"""Dependency-free numeric routines."""

from .newton_sqrt import newton_sqrt, PLATEAU_EXTRA_ITERATIONS

__all__ = ["newton_sqrt", "PLATEAU_EXTRA_ITERATIONS"]
