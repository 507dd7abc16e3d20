"""Client board domain: lanes, errors, input validation and rank reconciliation."""

from .errors import (
    InvalidIdentifier,
    InvalidLaneName,
    InvalidPriorityValue,
    PersistenceFailure,
    SeedDataError,
    ShiptivityError,
)
from .lanes import Lane
from .reconciler import RankReconciler

__all__ = [
    "Lane",
    "RankReconciler",
    "ShiptivityError",
    "InvalidIdentifier",
    "InvalidLaneName",
    "InvalidPriorityValue",
    "PersistenceFailure",
    "SeedDataError",
]
