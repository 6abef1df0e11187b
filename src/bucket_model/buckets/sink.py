# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE
from .base import Bucket


class SinkBucket(Bucket):
    def __init__(self, name: str, min_reserve: float = 0.0, balance: float = 0.0):
        """ Models an unbounded bucket that absorbs any excess funds

        Args:
            name: Bucket name used for reporting
            min_reserve: Balance to reach and keep before filling the next bucket
            balance: Starting balance
        """
        super().__init__(name, min_reserve, balance)

    def deposit(self, amount: float) -> float:
        if amount <= 0:
            return 0.0
        self.balance += amount
        return 0.0

    def is_full(self) -> bool:
        # No ceiling
        return False

    def __repr__(self) -> str:
        return (f"SinkBucket({self.name!r}, balance={round(self.balance, 2)}, "
                f"min={self.min_reserve})")
