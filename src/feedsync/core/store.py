"""本地文章状态."""

import logging
from typing import Any

from feedsync.core.reader import ReaderClient
from feedsync.models.article import ArticleFilter

logger = logging.getLogger(__name__)


class ArticleStore:
    """
    本地文章视图.

    all_articles 是全部文章（用于侧边栏未读计数），
    articles 是按筛选条件加载的当前可见列表。
    两者都只做整体替换，不做局部修改。
    """

    def __init__(
        self,
        client: ReaderClient,
        article_filter: ArticleFilter | None = None,
    ) -> None:
        self.client = client
        self.filter = article_filter or ArticleFilter()
        self.all_articles: list[dict[str, Any]] = []
        self.articles: list[dict[str, Any]] = []

    def set_all_articles(self, collection: list[dict[str, Any]]) -> None:
        """整体替换全部文章."""
        self.all_articles = list(collection)

    def set_filter(
        self,
        feed_id: str | int | None = None,
        unread_only: bool = False,
        saved_only: bool = False,
    ) -> None:
        """更新可见列表的筛选条件."""
        self.filter = ArticleFilter(
            feed_id=feed_id,
            unread_only=unread_only,
            saved_only=saved_only,
        )

    async def fetch_articles(self) -> None:
        """按当前筛选条件重新加载可见列表."""
        article_filter = self.filter
        try:
            # 查看收藏时不按未读过滤
            data = await self.client.get_articles(
                feed_id=article_filter.feed_id,
                unread_only=article_filter.unread_only and not article_filter.saved_only,
            )
        except Exception as e:
            logger.exception(f"加载文章列表失败: {e}")
            return

        if article_filter.saved_only:
            data = [a for a in data if a.get("is_saved")]

        # 服务端可能忽略 feedId，本地再过滤一次
        if article_filter.feed_id is not None:
            data = [
                a
                for a in data
                if str(a.get("feed_id")) == str(article_filter.feed_id)
            ]

        self.articles = data

    def unread_counts(self) -> dict[str, int]:
        """统计未读数：total 以及每个 feed_id 的数量."""
        counts: dict[str, int] = {"total": 0}
        for article in self.all_articles:
            if article.get("is_read"):
                continue
            counts["total"] += 1
            feed_key = str(article.get("feed_id"))
            counts[feed_key] = counts.get(feed_key, 0) + 1
        return counts
