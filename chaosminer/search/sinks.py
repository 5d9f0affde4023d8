"""Consumers of accepted trajectories.

A renderer receives every accepted ``PipelineOutcome`` (points, bounds,
spread and the artifact file name) through ``TrajectorySink.consume``.
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import List

from chaosminer.data.schemas import PipelineOutcome


class TrajectorySink(ABC):
    """Abstract base class for anything that consumes accepted trajectories."""

    @abstractmethod
    def consume(self, outcome: PipelineOutcome) -> None:
        """Receive one accepted outcome.

        Args:
            outcome: Accepted outcome with ``trajectory`` and ``spread`` set.
        """
        ...


class CollectingSink(TrajectorySink):
    """Keeps accepted outcomes in memory, optionally storing copies without arrays."""

    def __init__(self, keep_trajectories: bool = True):
        self.keep_trajectories = keep_trajectories
        self.outcomes: List[PipelineOutcome] = []

    def consume(self, outcome: PipelineOutcome) -> None:
        if not self.keep_trajectories:
            outcome = replace(outcome, trajectory=None)
        self.outcomes.append(outcome)

    def __len__(self) -> int:
        return len(self.outcomes)
