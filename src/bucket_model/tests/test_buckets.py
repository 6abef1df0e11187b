# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for the bucket variants.
"""

import unittest
import numpy as np

from ..buckets import (SinkBucket, BoundedBucket, TransactionBucket,
                       build_bucket, bucket_from_record)
from ..portfolio import Portfolio


class TestSinkBucket(unittest.TestCase):
    """Tests for SinkBucket."""

    def test_deposit_accepts_everything(self):
        """Sink buckets place the full amount."""
        bucket = SinkBucket("ETF", 0)
        self.assertEqual(bucket.deposit(1e9), 0.0)
        self.assertEqual(bucket.balance, 1e9)

    def test_never_full(self):
        """Sink buckets never report full."""
        bucket = SinkBucket("ETF", 0, balance=1e12)
        self.assertFalse(bucket.is_full())
        self.assertTrue(bucket.can_deposit(1.0))

    def test_non_positive_amounts_are_noops(self):
        """Zero and negative amounts leave the balance untouched."""
        bucket = SinkBucket("ETF", 0, balance=100)
        self.assertEqual(bucket.deposit(0), 0.0)
        self.assertEqual(bucket.deposit(-50), 0.0)
        self.assertEqual(bucket.withdraw(-50), 0.0)
        self.assertEqual(bucket.balance, 100)

    def test_withdraw_returns_shortfall(self):
        """Withdrawing more than the balance empties the bucket."""
        bucket = SinkBucket("Savings", 1000, balance=300)
        self.assertEqual(bucket.withdraw(500), 200)
        self.assertEqual(bucket.balance, 0)

    def test_negative_balance_raises(self):
        """Test that a negative starting balance raises error."""
        with self.assertRaises(ValueError):
            SinkBucket("ETF", 0, balance=-1)
        with self.assertRaises(ValueError):
            SinkBucket("ETF", -1)


class TestBoundedBucket(unittest.TestCase):
    """Tests for BoundedBucket."""

    def test_deposit_up_to_capacity(self):
        """Deposits beyond capacity are returned."""
        bucket = BoundedBucket("Liquidity", 0, 1000, balance=800)

        self.assertEqual(bucket.deposit(500), 300)
        self.assertEqual(bucket.balance, 1000)
        self.assertTrue(bucket.is_full())
        self.assertFalse(bucket.can_deposit(100))

    def test_deposit_into_full_bucket(self):
        """A full bucket returns the whole amount."""
        bucket = BoundedBucket("Liquidity", 0, 1000, balance=1000)
        self.assertEqual(bucket.deposit(250), 250)
        self.assertEqual(bucket.available_capacity, 0)

    def test_withdraw(self):
        """Withdrawing more than the balance returns the shortfall."""
        bucket = BoundedBucket("Liquidity", 0, 1000, balance=800)

        self.assertEqual(bucket.withdraw(300), 0)
        self.assertEqual(bucket.balance, 500)
        self.assertEqual(bucket.withdraw(1200), 700)
        self.assertEqual(bucket.balance, 0)

    def test_amount_never_too_small(self):
        """Bounded buckets have no transaction minimum."""
        bucket = BoundedBucket("Liquidity", 0, 1000)
        self.assertFalse(bucket.amount_too_small(0.01))

    def test_invalid_parameters(self):
        """Test that invalid capacity or balance raises error."""
        with self.assertRaises(ValueError):
            BoundedBucket("Liquidity", 0, 0)
        with self.assertRaises(ValueError):
            BoundedBucket("Liquidity", 0, 100, balance=101)


class TestTransactionBucket(unittest.TestCase):
    """Tests for TransactionBucket."""

    def test_deposit_below_minimum_rejected(self):
        """Amounts below min_transaction are rejected entirely."""
        bucket = TransactionBucket("Bonds", 0, 1000, 5000)

        self.assertEqual(bucket.deposit(500), 500)
        self.assertEqual(bucket.balance, 0)
        self.assertTrue(bucket.amount_too_small(500))
        self.assertFalse(bucket.can_deposit(500))

    def test_deposit_at_or_above_minimum(self):
        """Amounts meeting min_transaction are placed."""
        bucket = TransactionBucket("Bonds", 0, 1000, 5000)

        self.assertEqual(bucket.deposit(1500), 0)
        self.assertEqual(bucket.balance, 1500)
        self.assertTrue(bucket.can_deposit(1000))

    def test_deposit_fragment_rejected(self):
        """If only a fragment below min_transaction fits, nothing is placed."""
        bucket = TransactionBucket("Bonds", 0, 1000, 5000, balance=4500)

        self.assertEqual(bucket.deposit(2000), 2000)
        self.assertEqual(bucket.balance, 4500)

    def test_deposit_partial_fit(self):
        """A fitting part of at least min_transaction is placed."""
        bucket = TransactionBucket("Bonds", 0, 1000, 5000, balance=3500)

        self.assertEqual(bucket.deposit(2000), 500)
        self.assertEqual(bucket.balance, 5000)
        self.assertTrue(bucket.is_full())

    def test_withdraw_rejected_when_balance_below_minimum(self):
        """Nothing is withdrawn while the balance is below min_transaction."""
        bucket = TransactionBucket("Bonds", 0, 1000, 5000, balance=800)

        self.assertEqual(bucket.withdraw(300), 300)
        self.assertEqual(bucket.balance, 800)

    def test_withdraw_above_minimum(self):
        """Requests above min_transaction are served as usual."""
        bucket = TransactionBucket("Bonds", 0, 1000, 5000, balance=3000)

        self.assertEqual(bucket.withdraw(1500), 0)
        self.assertEqual(bucket.balance, 1500)

    def test_withdraw_more_than_balance(self):
        """Test that the whole balance is released when it is insufficient."""
        bucket = TransactionBucket("Bonds", 0, 1000, 5000, balance=3000)

        self.assertEqual(bucket.withdraw(5000), 2000)
        self.assertEqual(bucket.balance, 0)

    def test_over_withdrawal_redeposits_surplus(self):
        """A small request releases min_transaction and the surplus returns
        to the top of the portfolio."""
        cash = BoundedBucket("Cash", 2500, 2500)
        bonds = TransactionBucket("Bonds", 0, 1000, 5000, balance=3000)
        portfolio = Portfolio([cash, bonds])

        unsatisfied = bonds.withdraw(400, portfolio)

        self.assertEqual(unsatisfied, 0)
        self.assertEqual(bonds.balance, 2000)
        self.assertEqual(cash.balance, 600)

    def test_over_withdrawal_requires_portfolio(self):
        """Test that a surplus without a portfolio raises before mutating."""
        bucket = TransactionBucket("Bonds", 0, 1000, 5000, balance=3000)

        with self.assertRaises(ValueError):
            bucket.withdraw(400)
        self.assertEqual(bucket.balance, 3000)

    def test_invalid_parameters(self):
        """Test that inconsistent parameters raise error."""
        with self.assertRaises(ValueError):
            TransactionBucket("Bonds", 0, 0, 5000)
        with self.assertRaises(ValueError):
            TransactionBucket("Bonds", 0, 6000, 5000)
        with self.assertRaises(ValueError):
            TransactionBucket("Bonds", 0, 1000, 5000, balance=5001)


class TestBucketContracts(unittest.TestCase):
    """Randomized checks of the deposit/withdraw contracts."""

    def test_results_within_amount_and_bounds(self):
        """deposit/withdraw results stay in [0, amount] and balances in bounds."""
        rng = np.random.default_rng(0)
        sink = SinkBucket("ETF", 0)
        bounded = BoundedBucket("Liquidity", 500, 2500)
        bonds = TransactionBucket("Bonds", 0, 1000, 5000)
        # Over-withdrawals from the bond bucket need somewhere to go
        owner = Portfolio([SinkBucket("Overflow", 0), bonds])

        for _ in range(500):
            amount = float(rng.uniform(-100, 3000))
            for bucket in (sink, bounded, bonds):
                if rng.random() < 0.5:
                    result = bucket.deposit(amount)
                else:
                    result = bucket.withdraw(amount, owner)

                if amount <= 0:
                    self.assertEqual(result, 0.0)
                else:
                    self.assertGreaterEqual(result, 0.0)
                    self.assertLessEqual(result, amount)

                self.assertGreaterEqual(bucket.balance, 0.0)
                if hasattr(bucket, 'max_capacity'):
                    self.assertLessEqual(bucket.balance, bucket.max_capacity)


class TestBucketFactory(unittest.TestCase):
    """Tests for build_bucket and bucket_from_record."""

    def test_build_each_kind(self):
        """Test building every bucket kind."""
        self.assertIsInstance(build_bucket("sink", name="ETF"), SinkBucket)
        self.assertIsInstance(
            build_bucket("Bounded", name="Cash", min_reserve=0, max_capacity=10),
            BoundedBucket,
        )
        self.assertIsInstance(
            build_bucket("transaction", name="Bonds", min_reserve=0,
                         min_transaction=10, max_capacity=100),
            TransactionBucket,
        )

    def test_unknown_kind_raises(self):
        """Test that unknown kinds raise error."""
        with self.assertRaises(ValueError):
            build_bucket("crypto", name="Coins")

    def test_bad_parameters_raise(self):
        """Test that parameters of another variant raise error."""
        with self.assertRaises(ValueError):
            build_bucket("sink", name="ETF", max_capacity=10)

    def test_record_requires_kind(self):
        """Test that records without kind raise error."""
        with self.assertRaises(ValueError):
            bucket_from_record({"name": "ETF"})
        bucket = bucket_from_record({"kind": "sink", "name": "ETF", "balance": 5})
        self.assertEqual(bucket.balance, 5)


if __name__ == '__main__':
    unittest.main()
