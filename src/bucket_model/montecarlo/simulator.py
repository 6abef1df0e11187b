# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo simulation orchestrator.

This module provides the MonteCarloSimulator class which drives many
independent trajectories of a bucket portfolio through monthly salary
deposits and expense withdrawals, recording the portfolio state and the
deepest bucket touched every month.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import numpy as np
from joblib import Parallel, delayed

from ..exceptions import PortfolioError
from ..portfolio import Portfolio, PortfolioSnapshot
from .config import MonteCarloConfig, CashflowAssumptions
from .unforeseen import UnforeseenEvent, sample_unforeseen_costs
from .results import SimulationResults

logger = logging.getLogger(__name__)

NO_ACCESS = -1


@dataclass
class TrajectoryResult:
    """Output of one simulated trajectory.

    Attributes:
        index: Trajectory index within the batch
        snapshots: Portfolio state after each simulated month
        accessed: Deepest bucket index accessed each month (-1 for none)
        error: Failure message if the trajectory ended early
    """
    index: int
    snapshots: List[PortfolioSnapshot] = field(default_factory=list)
    accessed: List[int] = field(default_factory=list)
    error: Optional[str] = None


def trajectory_seed(entropy: int, index: int) -> np.random.SeedSequence:
    """Seed sequence of trajectory `index`, identical to the `index`-th child
    spawned from `SeedSequence(entropy)`."""
    return np.random.SeedSequence(entropy, spawn_key=(index,))


def simulate_trajectory(portfolio: Portfolio,
                        cashflow: CashflowAssumptions,
                        events: Sequence[UnforeseenEvent],
                        num_months: int,
                        seed: np.random.SeedSequence,
                        index: int = 0,
                        stop_on_failure: bool = True) -> TrajectoryResult:
    """Simulate one trajectory on a private copy of `portfolio`.

    Args:
        portfolio: Base portfolio, left untouched
        cashflow: Starting capital, salary and fixed expenses
        events: Unforeseen expense categories drawn every month
        num_months: Number of months to simulate
        seed: Seed of this trajectory's random generator
        index: Trajectory index, recorded in the result
        stop_on_failure: Re-raise infeasible operations instead of
                         recording them in the result

    Returns:
        TrajectoryResult with one snapshot per completed month
    """
    rng = np.random.default_rng(seed)
    traj_portfolio = portfolio.copy()
    result = TrajectoryResult(index=index)

    try:
        if cashflow.starting_capital > 0:
            traj_portfolio.deposit(cashflow.starting_capital)

        for _ in range(num_months):
            if cashflow.salary > 0:
                traj_portfolio.deposit(cashflow.salary)

            expenses = cashflow.fixed_expenses + sample_unforeseen_costs(events, rng)
            accessed = traj_portfolio.withdraw(expenses) if expenses > 0 else NO_ACCESS

            result.accessed.append(accessed)
            result.snapshots.append(traj_portfolio.snapshot())
    except PortfolioError as e:
        if stop_on_failure:
            raise
        result.error = str(e)
        logger.warning("Trajectory %d ended in month %d: %s",
                       index, len(result.snapshots) + 1, e)

    return result


class MonteCarloSimulator:
    """Orchestrates Monte Carlo simulations of a bucket portfolio.

    The workflow, per trajectory:
    1. Deep-copy the base portfolio and deposit the starting capital
    2. Every month deposit the salary, draw the unforeseen costs and
       withdraw fixed plus unforeseen expenses
    3. Record the deepest bucket accessed and a snapshot of the balances

    Trajectories are independent. Trajectory `i` always draws from the
    `i`-th child of the root seed sequence, so results do not depend on
    `n_jobs` and any trajectory can be reproduced on its own.

    Example:
        >>> simulator = MonteCarloSimulator(
        ...     MonteCarloConfig(num_trajectories=500, num_months=60, random_seed=1)
        ... )
        >>> results = simulator.run(
        ...     Portfolio.create_example(),
        ...     CashflowAssumptions(starting_capital=5000, salary=3000, fixed_expenses=2200),
        ...     create_default_events(),
        ... )
        >>> stats = results.usage_statistics()
    """

    def __init__(self, config: Optional[MonteCarloConfig] = None):
        """Initialize the simulator.

        Args:
            config: Simulation configuration. If None, uses defaults.
        """
        self.config = config or MonteCarloConfig()
        self.entropy = np.random.SeedSequence(self.config.random_seed).entropy

    def run(self,
            portfolio: Portfolio,
            cashflow: CashflowAssumptions,
            events: Sequence[UnforeseenEvent]) -> SimulationResults:
        """Run the Monte Carlo simulation.

        Args:
            portfolio: Base portfolio configuration. Never mutated.
            cashflow: Starting capital, salary and fixed monthly expenses
            events: Unforeseen expense categories

        Returns:
            SimulationResults holding the snapshot and access grids

        Raises:
            PortfolioError: If a trajectory hits an infeasible operation and
                            config.stop_on_failure is set
        """
        num_trajectories = self.config.num_trajectories
        num_months = self.config.num_months
        events = list(events)

        logger.debug("Running %d trajectories x %d months with %d event categories (n_jobs=%d)",
                     num_trajectories, num_months, len(events), self.config.n_jobs)

        if self.config.n_jobs == 1:
            trajectories = [self.run_trajectory(portfolio, cashflow, events, i)
                            for i in range(num_trajectories)]
        else:
            trajectories = Parallel(n_jobs=self.config.n_jobs, backend='loky')(
                delayed(simulate_trajectory)(
                    portfolio, cashflow, events, num_months,
                    trajectory_seed(self.entropy, i), i, self.config.stop_on_failure
                )
                for i in range(num_trajectories)
            )

        results = self._collect(portfolio, trajectories)
        logger.debug("Finished %r", results)
        return results

    def run_trajectory(self,
                       portfolio: Portfolio,
                       cashflow: CashflowAssumptions,
                       events: Sequence[UnforeseenEvent],
                       index: int = 0) -> TrajectoryResult:
        """Run a single trajectory of the batch.

        Useful for debugging or inspecting one path in detail: the result is
        identical to trajectory `index` of `run` with the same config.

        Args:
            portfolio: Base portfolio configuration. Never mutated.
            cashflow: Starting capital, salary and fixed monthly expenses
            events: Unforeseen expense categories
            index: Trajectory index

        Returns:
            TrajectoryResult for that trajectory
        """
        return simulate_trajectory(
            portfolio, cashflow, events, self.config.num_months,
            trajectory_seed(self.entropy, index), index, self.config.stop_on_failure
        )

    def _collect(self, portfolio: Portfolio,
                 trajectories: Sequence[TrajectoryResult]) -> SimulationResults:
        """Write per-trajectory outputs into the (month, trajectory) grids."""
        num_months = self.config.num_months
        num_buckets = len(portfolio)
        snapshots = np.empty((num_months, len(trajectories)), dtype=object)
        accesses = np.zeros((num_months, len(trajectories), num_buckets), dtype=bool)
        failures = {}

        for traj in trajectories:
            for month, snapshot in enumerate(traj.snapshots):
                snapshots[month, traj.index] = snapshot
            for month, bucket_idx in enumerate(traj.accessed):
                if bucket_idx != NO_ACCESS:
                    accesses[month, traj.index, bucket_idx] = True
            if traj.error is not None:
                failures[traj.index] = traj.error

        return SimulationResults(snapshots, accesses, portfolio.bucket_names(),
                                 failed_trajectories=failures)


def run_simulation(portfolio: Portfolio,
                   starting_capital: float,
                   salary: float,
                   fixed_expenses: float,
                   unforeseen_events: Sequence[UnforeseenEvent],
                   num_trajectories: int,
                   num_months: int,
                   random_seed: Optional[int] = None,
                   n_jobs: int = 1) -> Tuple[np.ndarray, np.ndarray]:
    """Simulate `num_trajectories` independent trajectories of `num_months`.

    Returns:
        (snapshot_grid, access_grid): a (months x trajectories) object array
        of PortfolioSnapshot and a (months x trajectories x buckets) boolean
        array marking the deepest bucket accessed each month
    """
    config = MonteCarloConfig(num_trajectories=num_trajectories, num_months=num_months,
                              random_seed=random_seed, n_jobs=n_jobs)
    cashflow = CashflowAssumptions(starting_capital, salary, fixed_expenses)
    results = MonteCarloSimulator(config).run(portfolio, cashflow, unforeseen_events)
    return results.snapshots, results.accesses
