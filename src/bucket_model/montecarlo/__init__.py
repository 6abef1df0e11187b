# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo simulation module for bucket liquidity stress tests.

This module simulates many independent monthly trajectories of a bucket
portfolio under salary, fixed expenses and clustered unforeseen costs, and
aggregates how often each liquidity tier had to be tapped.
"""

from .config import MonteCarloConfig, CashflowAssumptions
from .unforeseen import UnforeseenEvent, sample_unforeseen_costs, create_default_events
from .results import SimulationResults, usage_statistics, get_balances
from .simulator import MonteCarloSimulator, TrajectoryResult, run_simulation

__all__ = [
    'MonteCarloConfig',
    'CashflowAssumptions',
    'UnforeseenEvent',
    'sample_unforeseen_costs',
    'create_default_events',
    'SimulationResults',
    'usage_statistics',
    'get_balances',
    'MonteCarloSimulator',
    'TrajectoryResult',
    'run_simulation',
]
