# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Liquidity bucket variants.

Three variants share the Bucket interface: SinkBucket (unbounded),
BoundedBucket (capacity ceiling) and TransactionBucket (capacity ceiling plus
a minimum transaction size).
"""

from .base import Bucket
from .sink import SinkBucket
from .bounded import BoundedBucket
from .transaction import TransactionBucket
from .factory import BUCKET_KINDS, build_bucket, bucket_from_record

__all__ = [
    'Bucket',
    'SinkBucket',
    'BoundedBucket',
    'TransactionBucket',
    'BUCKET_KINDS',
    'build_bucket',
    'bucket_from_record',
]
