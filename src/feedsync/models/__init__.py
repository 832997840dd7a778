"""数据模型."""

from feedsync.models.article import ArticleFilter
from feedsync.models.progress import SyncProgress

__all__ = [
    "ArticleFilter",
    "SyncProgress",
]
