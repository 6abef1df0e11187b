# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Errors raised by portfolio cascade operations."""


class PortfolioError(Exception):
    """Base class for failed portfolio operations."""


class InvalidAmountError(PortfolioError, ValueError):
    """Deposit or withdrawal amount was not strictly positive."""


class InsufficientCapacityError(PortfolioError):
    """A deposit could not be fully placed across all buckets.

    Usually means the portfolio is misconfigured (total capacity too small).
    """

    def __init__(self, amount: float, remaining: float):
        self.amount = amount
        self.remaining = remaining
        super().__init__(
            f"Could not deposit all funds. Requested: {amount}, remaining: {remaining}"
        )


class InsufficientFundsError(PortfolioError):
    """A withdrawal exceeded the funds the buckets could release."""

    def __init__(self, amount: float, remaining: float):
        self.amount = amount
        self.remaining = remaining
        super().__init__(
            f"Insufficient funds to withdraw {amount}. Outstanding: {remaining}"
        )
