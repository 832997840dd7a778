"""核心业务逻辑."""

from feedsync.core.frames import FrameDecoder, consume_events, iter_frames
from feedsync.core.reader import ReaderAPIError, ReaderClient, ReaderConfig
from feedsync.core.store import ArticleStore
from feedsync.core.sync import FeedSyncService

__all__ = [
    "ArticleStore",
    "FeedSyncService",
    "FrameDecoder",
    "ReaderAPIError",
    "ReaderClient",
    "ReaderConfig",
    "consume_events",
    "iter_frames",
]
