"""Threaded discussion engine: boards, replies, votes, bookmarks and ranked feeds."""

__version__ = "0.1.0"
