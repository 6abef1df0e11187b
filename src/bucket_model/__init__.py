# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Bucket Liquidity Stress Test

Simulates many random financial futures of a "bucket" liquidity strategy and
records how often and how deeply each liquidity tier is drained.

Example usage:
    from bucket_model import (Portfolio, BoundedBucket, SinkBucket, TransactionBucket,
                              UnforeseenEvent, run_simulation, usage_statistics)

    portfolio = Portfolio([
        BoundedBucket("Liquidity", min_reserve=2500, max_capacity=2500),
        SinkBucket("Savings", min_reserve=1000),
        TransactionBucket("Bonds", min_reserve=4000, min_transaction=1000, max_capacity=5000),
        SinkBucket("ETF", min_reserve=0),
    ])
    events = [UnforeseenEvent.from_moments(0.5, 3000.0, 1000.0)]
    snapshots, accesses = run_simulation(portfolio, 5000, 3000, 2200, events,
                                         num_trajectories=500, num_months=120)
    stats = usage_statistics(accesses, portfolio.bucket_names())
"""

# Exceptions
from .exceptions import (
    PortfolioError,
    InvalidAmountError,
    InsufficientCapacityError,
    InsufficientFundsError,
)

# Buckets
from .buckets import (
    Bucket,
    SinkBucket,
    BoundedBucket,
    TransactionBucket,
    build_bucket,
)

# Portfolio
from .portfolio import Portfolio, PortfolioSnapshot, deposit, withdraw, rebalance

# Monte Carlo Simulation
from .montecarlo import (
    MonteCarloSimulator,
    MonteCarloConfig,
    CashflowAssumptions,
    SimulationResults,
    TrajectoryResult,
    UnforeseenEvent,
    sample_unforeseen_costs,
    create_default_events,
    run_simulation,
    usage_statistics,
    get_balances,
)

# Version
from .__meta__ import __version__

__all__ = [
    # Exceptions
    'PortfolioError', 'InvalidAmountError',
    'InsufficientCapacityError', 'InsufficientFundsError',
    # Buckets
    'Bucket', 'SinkBucket', 'BoundedBucket', 'TransactionBucket', 'build_bucket',
    # Portfolio
    'Portfolio', 'PortfolioSnapshot', 'deposit', 'withdraw', 'rebalance',
    # Monte Carlo
    'MonteCarloSimulator', 'MonteCarloConfig', 'CashflowAssumptions',
    'SimulationResults', 'TrajectoryResult', 'UnforeseenEvent',
    'sample_unforeseen_costs', 'create_default_events',
    'run_simulation', 'usage_statistics', 'get_balances',
    # Version
    '__version__',
]
