# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Configuration for Monte Carlo simulations."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class MonteCarloConfig:
    """Configuration for Monte Carlo simulation parameters.
    
    Attributes:
        num_trajectories: Number of independent trajectories to run. Default 500.
        num_months: Simulation horizon in months. Default 120.
        random_seed: Optional seed for reproducible results. Default None.
        n_jobs: Number of parallel workers (joblib semantics, -1 uses all
                cores). Default 1 runs trajectories sequentially.
        stop_on_failure: If True, an infeasible deposit or withdrawal aborts
                         the whole batch. If False, the failing trajectory is
                         recorded and the batch continues. Default True.
    """
    num_trajectories: int = 500
    num_months: int = 120
    random_seed: Optional[int] = None
    n_jobs: int = 1
    stop_on_failure: bool = True
    
    def __post_init__(self):
        if self.num_trajectories < 1:
            raise ValueError("num_trajectories must be at least 1")
        if self.num_months < 1:
            raise ValueError("num_months must be at least 1")
        if self.n_jobs == 0:
            raise ValueError("n_jobs cannot be 0")


@dataclass
class CashflowAssumptions:
    """Monthly household cashflow driving each trajectory.
    
    Attributes:
        starting_capital: Deposited once before the first month
        salary: Deposited at the start of every month
        fixed_expenses: Withdrawn every month on top of unforeseen costs
    """
    starting_capital: float
    salary: float
    fixed_expenses: float
    
    def __post_init__(self):
        for field_name in ('starting_capital', 'salary', 'fixed_expenses'):
            value = getattr(self, field_name)
            if value < 0:
                raise ValueError(f"{field_name} cannot be negative: {value}")
