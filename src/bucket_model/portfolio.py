# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Bucket portfolio and its cascade (waterfall) protocol.

A Portfolio wraps an ordered list of buckets. Position in the list is the
priority: index 0 is the most liquid bucket and is accessed first for both
deposits and withdrawals.

A bucket receives rebalanced funds only once every earlier bucket holds at
least its `min_reserve`. When withdrawing, a bucket is reached only once every
earlier bucket is empty.

Deposits and withdrawals are atomic: if one fails, every bucket balance is
restored to what it was before the call.
"""

import copy
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, List, Mapping, Sequence, Tuple

from .buckets import Bucket, SinkBucket, BoundedBucket, TransactionBucket, bucket_from_record
from .exceptions import InvalidAmountError, InsufficientCapacityError, InsufficientFundsError

logger = logging.getLogger(__name__)

BUCKET_TYPES = (SinkBucket, BoundedBucket, TransactionBucket)


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Immutable copy of the bucket balances at one point in time.

    Attributes:
        bucket_names: Bucket names in priority order
        balances: Bucket balances in priority order
    """
    bucket_names: Tuple[str, ...]
    balances: Tuple[float, ...]

    @property
    def total_balance(self) -> float:
        return float(sum(self.balances))

    def balance_of(self, name: str) -> float:
        """Get the balance of a bucket by name."""
        try:
            return self.balances[self.bucket_names.index(name)]
        except ValueError:
            raise ValueError(
                f"Bucket '{name}' not found. Available: {list(self.bucket_names)}"
            ) from None

    def as_dict(self) -> dict:
        return dict(zip(self.bucket_names, self.balances))


class Portfolio:
    """Ordered collection of buckets implementing the cascade protocol.

    Example:
        >>> portfolio = Portfolio([
        ...     BoundedBucket("Liquidity", 2500, 2500),
        ...     SinkBucket("Savings", 1000),
        ...     TransactionBucket("Bonds", 4000, 1000, 5000),
        ...     SinkBucket("ETF", 0),
        ... ])
        >>> _ = portfolio.deposit(3100)
        >>> portfolio.balances()
        [2500.0, 600.0, 0.0, 0.0]
        >>> portfolio.withdraw(2800)
        1
    """

    def __init__(self, buckets: Sequence[Bucket]):
        """Initialize the portfolio.

        Args:
            buckets: Buckets in priority order (most liquid first)

        Raises:
            ValueError: If no buckets are given, a bucket is not one of the
                        supported variants, or names are duplicated
        """
        self.buckets: List[Bucket] = list(buckets)
        self._validate()

    def _validate(self):
        if not self.buckets:
            raise ValueError("Portfolio needs at least one bucket")

        for bucket in self.buckets:
            if not isinstance(bucket, BUCKET_TYPES):
                raise ValueError(
                    f"Unsupported bucket type {type(bucket).__name__}. "
                    f"Expected one of: {[t.__name__ for t in BUCKET_TYPES]}"
                )

        names = self.bucket_names()
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Bucket names must be unique, duplicated: {duplicates}")

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> 'Portfolio':
        """Create a portfolio from bucket records in priority order.

        Each record holds a "kind" ("sink", "bounded" or "transaction") and the
        constructor arguments of that variant.
        """
        return cls([bucket_from_record(record) for record in records])

    @classmethod
    def create_example(cls) -> 'Portfolio':
        """Create an empty four-tier portfolio.

        Cash account capped at 2500, a savings account keeping 1000, a bond
        ladder bought in 1000 chunks up to 5000 and an ETF sink for the rest.
        """
        return cls([
            BoundedBucket("Liquidity", 2500, 2500),
            SinkBucket("SavingAccount", 1000),
            TransactionBucket("Bonds", 4000, 1000, 5000),
            SinkBucket("ETF", 0),
        ])

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def bucket_names(self) -> List[str]:
        return [bucket.name for bucket in self.buckets]

    def balances(self) -> List[float]:
        return [bucket.balance for bucket in self.buckets]

    @property
    def total_balance(self) -> float:
        return float(sum(self.balances()))

    def snapshot(self) -> PortfolioSnapshot:
        """Take an immutable copy of the current balances."""
        return PortfolioSnapshot(tuple(self.bucket_names()), tuple(self.balances()))

    def copy(self) -> 'Portfolio':
        """Deep copy, so the copy evolves independently of this portfolio."""
        return copy.deepcopy(self)

    def __len__(self) -> int:
        return len(self.buckets)

    def __iter__(self) -> Iterator[Bucket]:
        return iter(self.buckets)

    def __getitem__(self, index: int) -> Bucket:
        return self.buckets[index]

    def __repr__(self) -> str:
        lines = [f"Portfolio with {len(self.buckets)} buckets:"]
        for idx, bucket in enumerate(self.buckets):
            lines.append(f"  [{idx}] {bucket!r}")
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Cascade operations
    # ------------------------------------------------------------------

    @contextmanager
    def _rollback_on_error(self):
        """Restore all balances if the wrapped operation raises."""
        saved = self.balances()
        try:
            yield
        except Exception:
            for bucket, balance in zip(self.buckets, saved):
                bucket.balance = balance
            logger.debug("Portfolio operation failed, balances restored to %s", saved)
            raise

    def deposit(self, amount: float, rebalance: bool = True) -> 'Portfolio':
        """Deposit funds, filling buckets in priority order.

        Each bucket is offered whatever is still unplaced. Afterwards the
        portfolio is rebalanced so that excess above each bucket's reserve
        moves further down the chain.

        Args:
            amount: Amount to deposit
            rebalance: Whether to rebalance after depositing

        Returns:
            This portfolio

        Raises:
            InvalidAmountError: If amount is not positive
            InsufficientCapacityError: If the buckets cannot hold the amount
        """
        if amount <= 0:
            raise InvalidAmountError(f"Deposit amount must be positive, got {amount}")

        with self._rollback_on_error():
            remaining = float(amount)
            for bucket in self.buckets:
                if remaining <= 0:
                    break
                remaining = bucket.deposit(remaining)

            if remaining > 0:
                raise InsufficientCapacityError(amount, remaining)

            if rebalance:
                self.rebalance()
        return self

    def _rebalance_bucket(self, bucket: Bucket, idx: int):
        """Move a bucket's excess above `min_reserve` to lower-priority buckets.

        A destination that rejects the amount as too small stops forwarding,
        so the excess stays where it is rather than skipping ahead.
        """
        if isinstance(bucket, TransactionBucket):
            return

        excess = bucket.balance - bucket.min_reserve
        if excess <= 0:
            return

        for next_bucket in self.buckets[idx + 1:]:
            if next_bucket.amount_too_small(excess):
                break

            if next_bucket.can_deposit(excess):
                remaining = next_bucket.deposit(excess)
                bucket.balance -= excess - remaining
                excess = remaining

                if excess <= 0:
                    break

    def rebalance(self):
        """Rebalance all buckets in priority order until nothing moves.

        A later bucket forwarding its excess can free room for an earlier
        source that was blocked in the same pass, so passes repeat until the
        balances are stable. Funds only move forward, so this terminates.
        """
        while True:
            before = self.balances()
            for idx, bucket in enumerate(self.buckets):
                self._rebalance_bucket(bucket, idx)
            if self.balances() == before:
                break

    def withdraw(self, amount: float) -> int:
        """Withdraw funds, draining buckets in priority order.

        Empty buckets are skipped. Every non-empty bucket reached counts as
        accessed, even when it cannot cover the outstanding amount.

        Args:
            amount: Amount to withdraw

        Returns:
            Index of the deepest bucket accessed

        Raises:
            InvalidAmountError: If amount is not positive
            InsufficientFundsError: If the buckets cannot release the amount
            InsufficientCapacityError: If a transaction bucket releases more
                                       than requested and the surplus cannot
                                       be re-deposited
        """
        if amount <= 0:
            raise InvalidAmountError(f"Withdrawal amount must be positive, got {amount}")

        with self._rollback_on_error():
            remaining = float(amount)
            last_accessed = -1

            for idx, bucket in enumerate(self.buckets):
                if remaining <= 0:
                    break

                if bucket.balance == 0:
                    continue

                last_accessed = idx
                remaining = bucket.withdraw(remaining, self)

            if remaining > 0:
                raise InsufficientFundsError(amount, remaining)

        return last_accessed


def deposit(portfolio: Portfolio, amount: float, rebalance: bool = True) -> Portfolio:
    """Deposit `amount` into `portfolio`. See Portfolio.deposit."""
    return portfolio.deposit(amount, rebalance=rebalance)


def withdraw(portfolio: Portfolio, amount: float) -> int:
    """Withdraw `amount` from `portfolio`. See Portfolio.withdraw."""
    return portfolio.withdraw(amount)


def rebalance(portfolio: Portfolio):
    """Rebalance `portfolio`. See Portfolio.rebalance."""
    portfolio.rebalance()
