# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Unforeseen expense generator.

An unforeseen event category (e.g. "medical emergencies") is a compound
process: the number of events in a month is drawn from a discrete
distribution, and each event's cost from a continuous one. Costly events
therefore arrive in clusters instead of as a flat averaged expense.
"""

from typing import List, Optional, Sequence
import numpy as np
from scipy import stats


def _is_discrete(distribution) -> bool:
    return isinstance(getattr(distribution, 'dist', None), stats.rv_discrete)


def _is_continuous(distribution) -> bool:
    return isinstance(getattr(distribution, 'dist', None), stats.rv_continuous)


class UnforeseenEvent:
    """One category of unforeseen expenses.

    Example:
        >>> repairs = UnforeseenEvent.from_moments(0.5, 3000.0, 1000.0, name="Major repairs")
        >>> rng = np.random.default_rng(42)
        >>> cost = repairs.sample(rng)  # 0.0 in months without repairs
    """

    def __init__(self, event_distribution, value_distribution, name: Optional[str] = None):
        """Initialize from a pair of frozen scipy.stats distributions.

        Args:
            event_distribution: Discrete distribution of the number of events
                                per month (e.g. stats.poisson(1.5))
            value_distribution: Continuous distribution of the cost of a
                                single event (e.g. stats.gamma(4, scale=500))
            name: Optional category name for reporting

        Raises:
            ValueError: If the distributions are not of the expected kind
        """
        if not _is_discrete(event_distribution):
            raise ValueError(
                "event_distribution must be a frozen discrete scipy.stats distribution"
            )
        if not _is_continuous(value_distribution):
            raise ValueError(
                "value_distribution must be a frozen continuous scipy.stats distribution"
            )
        self.event_distribution = event_distribution
        self.value_distribution = value_distribution
        self.name = name

    @classmethod
    def from_moments(cls, mean_frequency: float, mean_value: float, std_value: float,
                     name: Optional[str] = None) -> 'UnforeseenEvent':
        """Create a Poisson-Gamma event model from its moments.

        The Gamma shape and scale are chosen so that a single event cost has
        mean `mean_value` and standard deviation `std_value`.

        Args:
            mean_frequency: Average number of events per month
            mean_value: Average cost of one event
            std_value: Standard deviation of the cost of one event
            name: Optional category name for reporting

        Returns:
            Configured UnforeseenEvent
        """
        if mean_frequency < 0:
            raise ValueError(f"mean_frequency cannot be negative: {mean_frequency}")
        if mean_value <= 0:
            raise ValueError(f"mean_value must be positive: {mean_value}")
        if std_value <= 0:
            raise ValueError(f"std_value must be positive: {std_value}")

        event_distribution = stats.poisson(mean_frequency)
        value_distribution = stats.gamma(
            mean_value ** 2 / std_value ** 2, scale=std_value ** 2 / mean_value
        )
        return cls(event_distribution, value_distribution, name=name)

    @property
    def expected_cost(self) -> float:
        """Expected monthly cost (mean count times mean event cost)."""
        return float(self.event_distribution.mean() * self.value_distribution.mean())

    def sample(self, rng: np.random.Generator) -> float:
        """Sample the total cost of this category for one month.

        Args:
            rng: Random generator to draw from

        Returns:
            Sum of the sampled event costs, 0.0 when no event occurs
        """
        num_events = int(self.event_distribution.rvs(random_state=rng))
        if num_events == 0:
            return 0.0
        return float(np.sum(self.value_distribution.rvs(size=num_events, random_state=rng)))

    def __repr__(self) -> str:
        label = f"{self.name!r}, " if self.name else ""
        return (f"UnforeseenEvent({label}events={self.event_distribution.dist.name}"
                f"{self.event_distribution.args}, values={self.value_distribution.dist.name}"
                f"{self.value_distribution.args})")


def sample_unforeseen_costs(events: Sequence[UnforeseenEvent], rng: np.random.Generator) -> float:
    """Sample the total unforeseen cost across categories for one month.

    Each category is drawn independently and the costs are summed.
    """
    return float(sum(event.sample(rng) for event in events))


def create_default_events() -> List[UnforeseenEvent]:
    """Create a typical household set of unforeseen expense categories."""
    return [
        UnforeseenEvent.from_moments(0.5, 3000.0, 1000.0, name="Major repairs"),
        UnforeseenEvent.from_moments(1.2, 500.0, 200.0, name="Minor emergencies"),
        UnforeseenEvent.from_moments(0.1, 10000.0, 5000.0, name="Medical emergencies"),
    ]
