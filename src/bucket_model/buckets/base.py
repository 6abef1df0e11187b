# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Common interface for liquidity buckets.

A bucket is one liquidity tier of a portfolio. Every bucket has a name, a
minimum reserve it keeps before excess is forwarded to the next tier during
rebalancing, and a balance that is mutated in place.

The set of variants is closed: SinkBucket, BoundedBucket and TransactionBucket.
"""

from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..portfolio import Portfolio


class Bucket(ABC):
    """Interface shared by all bucket variants."""

    def __init__(self, name: str, min_reserve: float = 0.0, balance: float = 0.0):
        if min_reserve < 0:
            raise ValueError(f"min_reserve cannot be negative: {min_reserve}")
        if balance < 0:
            raise ValueError(f"balance cannot be negative: {balance}")
        self.name = name
        self.min_reserve = float(min_reserve)
        self.balance = float(balance)

    @abstractmethod
    def deposit(self, amount: float) -> float:
        """Place as much of `amount` as allowed.

        Returns:
            The amount that could not be placed, in [0, amount].
        """

    def withdraw(self, amount: float, portfolio: Optional['Portfolio'] = None) -> float:
        """Withdraw up to `amount` from this bucket.

        Args:
            amount: Amount requested
            portfolio: Owning portfolio. Unused by the plain variants.

        Returns:
            The amount that could not be withdrawn, in [0, amount].
        """
        if amount <= 0:
            return 0.0

        taken = min(amount, self.balance)
        self.balance -= taken
        return amount - taken

    @abstractmethod
    def is_full(self) -> bool:
        """Whether the bucket has reached its capacity."""

    def can_deposit(self, amount: float) -> bool:
        return not self.is_full()

    def amount_too_small(self, amount: float) -> bool:
        """Whether `amount` is below this bucket's transaction minimum."""
        return False
