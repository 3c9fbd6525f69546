"""
Background workers for non-blocking side effects.

Workers:
- DispatchQueue: single-thread queue for fire-and-forget jobs
- NotificationSink: emails each stored pain point via the dispatch queue
"""

from .dispatch import DispatchQueue
from .notifications import NotificationSink

__all__ = ["DispatchQueue", "NotificationSink"]
