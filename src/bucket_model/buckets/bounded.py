# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE
from .base import Bucket


class BoundedBucket(Bucket):
    def __init__(self, name: str, min_reserve: float, max_capacity: float,
                 balance: float = 0.0):
        """ Models a bucket with a maximum capacity

        Args:
            name: Bucket name used for reporting
            min_reserve: Balance to reach and keep before filling the next bucket
            max_capacity: Maximum balance the bucket can hold
            balance: Starting balance
        """
        super().__init__(name, min_reserve, balance)
        if max_capacity <= 0:
            raise ValueError(f"max_capacity must be positive: {max_capacity}")
        if self.balance > max_capacity:
            raise ValueError(f"balance {balance} exceeds max_capacity {max_capacity}")
        self.max_capacity = float(max_capacity)

    @property
    def available_capacity(self) -> float:
        return max(self.max_capacity - self.balance, 0.0)

    def deposit(self, amount: float) -> float:
        """Fill up to max_capacity and return what did not fit."""
        if amount <= 0:
            return 0.0

        available = self.available_capacity
        place = min(amount, available)
        # Snap to the ceiling so float rounding never overfills
        self.balance = self.max_capacity if place >= available else self.balance + place
        return amount - place

    def is_full(self) -> bool:
        return self.balance >= self.max_capacity

    def __repr__(self) -> str:
        return (f"BoundedBucket({self.name!r}, balance={round(self.balance, 2)}, "
                f"min={self.min_reserve}, max={self.max_capacity})")
