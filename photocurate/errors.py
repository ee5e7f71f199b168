"""Fault taxonomy and the verdict type returned by the classifier."""

from dataclasses import dataclass
from typing import Optional


class ClassificationFault(Exception):
    """Base class for every condition that stops a classification."""


class DecodeFailure(ClassificationFault):
    """Input file is missing, unreadable or not a decodable image/video."""


class NumericFault(ClassificationFault):
    """Unexpected failure inside a numeric computation."""


class PreconditionViolation(ClassificationFault):
    """Caller broke an operation's contract (e.g. empty baseline set)."""


@dataclass(frozen=True)
class Verdict:
    """Outcome of a single classification.

    ``detected`` is the safe-default boolean: it is False whenever the
    image could not be evaluated. ``fault`` tells the two cases apart.
    """

    detected: bool
    fault: Optional[ClassificationFault] = None

    @property
    def evaluated(self) -> bool:
        return self.fault is None

    def __bool__(self) -> bool:
        return self.detected
