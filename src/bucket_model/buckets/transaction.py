# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE
from typing import Optional, TYPE_CHECKING

from .base import Bucket

if TYPE_CHECKING:
    from ..portfolio import Portfolio


class TransactionBucket(Bucket):
    def __init__(self, name: str, min_reserve: float, min_transaction: float,
                 max_capacity: float, balance: float = 0.0):
        """ Models a bounded bucket that only moves funds in chunks of at least
        `min_transaction` (e.g. a bond ladder or a term deposit)

        Transaction buckets are never used as a source when the portfolio
        rebalances. Config must place enough buffer ahead of them to accumulate
        `min_transaction`, otherwise they are silently under-filled.

        Args:
            name: Bucket name used for reporting
            min_reserve: Balance to reach and keep before filling the next bucket
            min_transaction: Smallest deposit or withdrawal the bucket accepts
            max_capacity: Maximum balance the bucket can hold
            balance: Starting balance
        """
        super().__init__(name, min_reserve, balance)
        if max_capacity <= 0:
            raise ValueError(f"max_capacity must be positive: {max_capacity}")
        if min_transaction <= 0:
            raise ValueError(f"min_transaction must be positive: {min_transaction}")
        if min_transaction > max_capacity:
            raise ValueError(
                f"min_transaction {min_transaction} exceeds max_capacity {max_capacity}"
            )
        if self.balance > max_capacity:
            raise ValueError(f"balance {balance} exceeds max_capacity {max_capacity}")
        self.min_transaction = float(min_transaction)
        self.max_capacity = float(max_capacity)

    @property
    def available_capacity(self) -> float:
        return max(self.max_capacity - self.balance, 0.0)

    def deposit(self, amount: float) -> float:
        """Deposit respecting capacity and the transaction minimum.

        The whole amount is rejected if it is below `min_transaction`, or if
        the part that fits would itself be below `min_transaction`.
        """
        if amount <= 0:
            return 0.0

        if amount < self.min_transaction:
            return amount

        available = self.available_capacity
        place = min(amount, available)
        if place < self.min_transaction:
            return amount

        self.balance = self.max_capacity if place >= available else self.balance + place
        return amount - place

    def withdraw(self, amount: float, portfolio: Optional['Portfolio'] = None) -> float:
        """Withdraw at least `min_transaction`.

        When less than `min_transaction` is requested the bucket still releases
        `min_transaction`; the surplus is deposited back into `portfolio`
        (cascading from the top, with rebalancing) and the request counts as
        fully satisfied.

        Raises:
            ValueError: If a surplus would be produced and no portfolio is given
            InsufficientCapacityError: If `portfolio` cannot take the surplus back
        """
        if amount <= 0:
            return 0.0

        if self.balance < self.min_transaction:
            return amount

        taken = max(min(amount, self.balance), self.min_transaction)
        surplus = taken - amount
        if surplus > 0 and portfolio is None:
            raise ValueError(
                f"Withdrawing {amount} from {self.name!r} releases {surplus} surplus "
                "that needs an owning portfolio to be re-deposited"
            )

        self.balance -= taken
        if surplus > 0:
            portfolio.deposit(surplus)
            return 0.0

        return amount - taken

    def is_full(self) -> bool:
        return self.balance >= self.max_capacity

    def can_deposit(self, amount: float) -> bool:
        return amount >= self.min_transaction and not self.is_full()

    def amount_too_small(self, amount: float) -> bool:
        return amount < self.min_transaction

    def __repr__(self) -> str:
        return (f"TransactionBucket({self.name!r}, balance={round(self.balance, 2)}, "
                f"min={self.min_reserve}, max={self.max_capacity}, "
                f"min_tx={self.min_transaction})")
