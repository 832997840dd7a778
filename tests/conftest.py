"""测试配置和 fixtures."""

import asyncio
from collections.abc import AsyncGenerator, AsyncIterator
from typing import Any

import httpx
import pytest
import pytest_asyncio

from feedsync.core.reader import ReaderClient, ReaderConfig
from feedsync.core.store import ArticleStore

BASE_URL = "http://reader.test"


class FakeReaderServer:
    """模拟阅读器服务端：同步进度流 + 文章列表."""

    def __init__(self) -> None:
        self.sync_chunks: list[bytes] = []
        self.sync_status = 200
        self.sync_json: Any = None
        self.sync_exception: Exception | None = None
        # 接下来若干次触发请求返回网络错误
        self.failing_syncs = 0
        self.stream_exception: Exception | None = None
        # 依次返回；用尽后重复最后一个
        self.article_responses: list[Any] = [[]]
        self.requests: list[httpx.Request] = []

    @property
    def article_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/api/articles"]

    async def _body(self) -> AsyncIterator[bytes]:
        for chunk in self.sync_chunks:
            yield chunk
        if self.stream_exception is not None:
            raise self.stream_exception

    def _next_articles(self) -> Any:
        if len(self.article_responses) > 1:
            return self.article_responses.pop(0)
        return self.article_responses[0]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # 让出控制权，使重叠的调用真正交错执行
        await asyncio.sleep(0)

        if request.url.path == "/api/feeds/sync-all":
            if self.failing_syncs > 0:
                self.failing_syncs -= 1
                raise httpx.ConnectError("Network error")
            if self.sync_exception is not None:
                raise self.sync_exception
            if self.sync_status != 200:
                return httpx.Response(self.sync_status, json=self.sync_json)
            return httpx.Response(200, content=self._body())

        if request.url.path == "/api/articles":
            result = self._next_articles()
            if isinstance(result, Exception):
                raise result
            if isinstance(result, httpx.Response):
                return result
            return httpx.Response(200, json=result)

        return httpx.Response(404, json={"error": "Not found"})


@pytest.fixture
def reader_server() -> FakeReaderServer:
    """创建模拟服务端."""
    return FakeReaderServer()


@pytest_asyncio.fixture
async def reader_client(
    reader_server: FakeReaderServer,
) -> AsyncGenerator[ReaderClient, None]:
    """创建连接到模拟服务端的客户端."""
    client = ReaderClient(
        ReaderConfig(base_url=BASE_URL),
        transport=httpx.MockTransport(reader_server.handler),
    )
    yield client
    await client.close()


@pytest.fixture
def article_store(reader_client: ReaderClient) -> ArticleStore:
    """创建文章状态."""
    return ArticleStore(reader_client)


@pytest.fixture
def sample_articles() -> list[dict[str, Any]]:
    """测试用的文章列表."""
    return [
        {"id": 1, "feed_id": 1, "title": "Article 1", "is_read": False, "is_saved": False},
        {"id": 2, "feed_id": 1, "title": "Article 2", "is_read": True, "is_saved": True},
        {"id": 3, "feed_id": 2, "title": "Article 3", "is_read": False, "is_saved": True},
    ]
