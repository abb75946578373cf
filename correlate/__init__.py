"""
Correlate package: turn raw GitHub search hits into per-day activity buckets.
"""

from .aggregate import aggregate_activity
from .buckets import bucketize

__all__ = ["aggregate_activity", "bucketize"]
