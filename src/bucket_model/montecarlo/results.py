# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo simulation results aggregation and analysis.

This module provides the SimulationResults class for analyzing the output of
a bucket simulation, including per-bucket balance percentiles and how often
each bucket had to be tapped.
"""

from typing import Dict, List, Optional, Sequence
import numpy as np
import pandas as pd


def usage_statistics(accesses: np.ndarray, bucket_names: Sequence[str]) -> Dict[str, np.ndarray]:
    """Count, per trajectory, the months each bucket level was reached.

    Reaching bucket `b` means every bucket before it was exhausted that
    month, so the count for `b` includes months where any deeper bucket was
    accessed. Counts are therefore non-increasing with bucket depth.

    Args:
        accesses: Boolean array (months, trajectories, buckets) with
                  accesses[m, t, b] True if b was the deepest bucket accessed
                  in month m of trajectory t
        bucket_names: Bucket names in priority order

    Returns:
        Dict mapping bucket name to an integer array of length
        num_trajectories, in priority order

    Example:
        >>> stats = usage_statistics(accesses, ["Cash", "Emergency Fund"])
        >>> np.percentile(stats["Emergency Fund"], [50, 95])
    """
    accesses = np.asarray(accesses, dtype=bool)
    if accesses.ndim != 3:
        raise ValueError(f"accesses must be 3-dimensional, got shape {accesses.shape}")

    num_buckets = accesses.shape[2]
    if len(bucket_names) != num_buckets:
        raise ValueError(
            f"Got {len(bucket_names)} bucket names for {num_buckets} buckets"
        )
    names = list(bucket_names)
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(f"Bucket names must be unique, duplicated: {duplicates}")

    stats = {}
    for bucket in range(num_buckets):
        reached = accesses[:, :, bucket:].any(axis=2)
        stats[bucket_names[bucket]] = reached.sum(axis=0)
    return stats


def get_balances(snapshots: np.ndarray, num_buckets: Optional[int] = None) -> np.ndarray:
    """Stack snapshot balances into a (buckets, months, trajectories) array.

    Cells without a snapshot (months after a trajectory failed) are NaN.
    `num_buckets` is taken from the first snapshot when not given, and must be
    given when the grid may hold no snapshot at all.
    """
    num_months, num_trajectories = snapshots.shape
    if num_buckets is None:
        num_buckets = next(
            (len(s.balances) for s in snapshots.flat if s is not None), 0
        )
    balances = np.full((num_buckets, num_months, num_trajectories), np.nan)

    for month in range(num_months):
        for traj in range(num_trajectories):
            snapshot = snapshots[month, traj]
            if snapshot is not None:
                balances[:, month, traj] = snapshot.balances
    return balances


class SimulationResults:
    """Aggregates and analyzes bucket simulation results.

    Example:
        >>> results = simulator.run(portfolio, cashflow, events)
        >>> print(results.get_usage_summary())
        >>> bands = results.get_percentile_data('Liquidity')
        >>> print(bands['Median'])
    """

    # Standard percentile levels for analysis
    PERCENTILES = {
        "Top 5%": 0.95,
        "Top 10%": 0.90,
        "Top 25%": 0.75,
        "Median": 0.50,
        "Bottom 25%": 0.25,
        "Bottom 10%": 0.10,
        "Bottom 5%": 0.05,
    }

    def __init__(self,
                 snapshots: np.ndarray,
                 accesses: np.ndarray,
                 bucket_names: Sequence[str],
                 failed_trajectories: Optional[Dict[int, str]] = None):
        """Initialize with simulation output.

        Args:
            snapshots: (months, trajectories) object array of PortfolioSnapshot
            accesses: (months, trajectories, buckets) boolean access grid
            bucket_names: Bucket names in priority order
            failed_trajectories: Trajectory index to failure message for
                                 trajectories that ended early
        """
        if snapshots.shape != accesses.shape[:2]:
            raise ValueError(
                f"Snapshot grid {snapshots.shape} doesn't match access grid {accesses.shape}"
            )
        if len(bucket_names) != accesses.shape[2]:
            raise ValueError(
                f"Got {len(bucket_names)} bucket names for {accesses.shape[2]} buckets"
            )
        self.snapshots = snapshots
        self.accesses = accesses
        self.bucket_names = list(bucket_names)
        self.failed_trajectories = dict(failed_trajectories or {})
        self.num_months, self.num_trajectories = snapshots.shape
        self._balances: Optional[np.ndarray] = None

    def get_balances(self) -> np.ndarray:
        """Get balances as a (buckets, months, trajectories) array."""
        if self._balances is None:
            self._balances = get_balances(self.snapshots, len(self.bucket_names))
        return self._balances

    def _bucket_index(self, bucket: str) -> int:
        if bucket not in self.bucket_names:
            raise ValueError(f"Bucket '{bucket}' not found. Available: {self.bucket_names}")
        return self.bucket_names.index(bucket)

    def usage_statistics(self) -> Dict[str, np.ndarray]:
        """Months each bucket level (or deeper) was reached, per trajectory."""
        return usage_statistics(self.accesses, self.bucket_names)

    def access_rate(self) -> Dict[str, float]:
        """Share of simulated months in which each bucket level was reached."""
        total_months = self.num_months * self.num_trajectories
        return {name: float(counts.sum()) / total_months
                for name, counts in self.usage_statistics().items()}

    def get_usage_summary(self) -> pd.DataFrame:
        """Summary statistics of the usage counts, one row per bucket.

        Columns: mean, std, min, p50, p95, max, and prob_any (share of
        trajectories that reached the bucket at least once).
        """
        rows = {}
        for name, counts in self.usage_statistics().items():
            rows[name] = {
                'mean': float(np.mean(counts)),
                'std': float(np.std(counts)),
                'min': int(np.min(counts)),
                'p50': float(np.percentile(counts, 50)),
                'p95': float(np.percentile(counts, 95)),
                'max': int(np.max(counts)),
                'prob_any': float(np.mean(counts > 0)),
            }
        df = pd.DataFrame.from_dict(rows, orient='index')
        df.index.name = 'Bucket'
        return df

    def get_percentile_data(self, bucket: str) -> Dict[str, List[float]]:
        """Get percentile bands for one bucket's balance across months.

        Args:
            bucket: Name of the bucket to analyze

        Returns:
            Dict mapping percentile names to lists of values (one per month)

        Raises:
            ValueError: If bucket not found in results
        """
        values = self.get_balances()[self._bucket_index(bucket)]

        percentile_data = {}
        for name, pct in self.PERCENTILES.items():
            percentile_data[name] = np.nanpercentile(values, pct * 100, axis=1).tolist()
        return percentile_data

    def get_percentile_df(self, bucket: str) -> pd.DataFrame:
        """Get percentile data as a DataFrame with months as index."""
        df = pd.DataFrame(self.get_percentile_data(bucket))
        df['Month'] = list(range(1, self.num_months + 1))
        return df.set_index('Month')

    def get_final_balances(self) -> pd.DataFrame:
        """Final-month balances, one row per trajectory and one column per bucket."""
        final = self.get_balances()[:, -1, :].T
        df = pd.DataFrame(final, columns=self.bucket_names)
        df.index.name = 'Trajectory'
        return df

    def success_rate(self) -> float:
        """Share of trajectories that completed without an infeasible operation."""
        return 1.0 - len(self.failed_trajectories) / self.num_trajectories

    def __repr__(self) -> str:
        return (f"SimulationResults(num_trajectories={self.num_trajectories}, "
                f"num_months={self.num_months}, num_buckets={len(self.bucket_names)}, "
                f"failed={len(self.failed_trajectories)})")
