# src/threadboard/services/__init__.py
"""Business logic services for the Threadboard application."""

from .cache import CacheStore, MemoryCacheStore, NullCacheStore, RedisCacheStore
from .feeds import FeedAssembler
from .vote_ledger import VoteResult, VoteState

__all__ = [
    "CacheStore",
    "FeedAssembler",
    "MemoryCacheStore",
    "NullCacheStore",
    "RedisCacheStore",
    "VoteResult",
    "VoteState",
]
