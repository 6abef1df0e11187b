# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Build buckets from plain parameter records."""

from typing import Any, Dict, Mapping

from .base import Bucket
from .sink import SinkBucket
from .bounded import BoundedBucket
from .transaction import TransactionBucket

BUCKET_KINDS: Dict[str, type] = {
    "sink": SinkBucket,
    "bounded": BoundedBucket,
    "transaction": TransactionBucket,
}


def build_bucket(kind: str, **params: Any) -> Bucket:
    """Create a bucket of the given kind.

    Args:
        kind: One of "sink", "bounded" or "transaction"
        **params: Constructor arguments of that variant

    Returns:
        The new bucket

    Raises:
        ValueError: If kind is unknown or parameters don't match the variant
    """
    try:
        bucket_cls = BUCKET_KINDS[kind.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown bucket kind '{kind}'. Available: {list(BUCKET_KINDS)}"
        ) from None

    try:
        return bucket_cls(**params)
    except TypeError as e:
        raise ValueError(f"Invalid parameters for {kind} bucket: {e}") from e


def bucket_from_record(record: Mapping[str, Any]) -> Bucket:
    """Create a bucket from a mapping with a "kind" key plus its parameters."""
    if "kind" not in record:
        raise ValueError(f"Bucket record is missing 'kind': {dict(record)}")
    params = {key: value for key, value in record.items() if key != "kind"}
    return build_bucket(record["kind"], **params)
