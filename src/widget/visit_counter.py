"""
Visit Counter Widget
页面加载时请求计数接口，并把结果写入显示元素
"""
import asyncio
import logging
from typing import Optional

import aiohttp

from .config import DEFAULT_ELEMENT_ID, DEFAULT_RENDER_WAIT
from .page import Page

logger = logging.getLogger(__name__)


class CounterFetchError(Exception):
    """计数获取失败"""


class CounterNetworkError(CounterFetchError):
    """The request never completed."""


class CounterHTTPError(CounterFetchError):
    """The endpoint answered with a non-success status."""

    def __init__(self, status: int, url: str):
        super().__init__(f"HTTP {status} from {url}")
        self.status = status
        self.url = url


class CounterParseError(CounterFetchError):
    """The body is not JSON or has no usable `count`."""


def parse_count(data) -> int:
    """
    从响应体中取出计数

    Args:
        data: 解码后的JSON

    Returns:
        非负整数计数
    """
    if not isinstance(data, dict):
        raise CounterParseError(f"Expected a JSON object, got {type(data).__name__}")
    if "count" not in data:
        raise CounterParseError("Response has no 'count' field")

    count = data["count"]
    # bool is an int subclass
    if isinstance(count, bool) or not isinstance(count, int):
        raise CounterParseError(f"'count' is not an integer: {count!r}")
    if count < 0:
        raise CounterParseError(f"'count' is negative: {count}")
    return count


class VisitCounterWidget:
    """访问计数组件"""

    def __init__(self, endpoint_url: str, element_id: str = DEFAULT_ELEMENT_ID, name: str = "visit_counter"):
        self.endpoint_url = endpoint_url
        self.element_id = element_id
        self.name = name
        self.logger = logging.getLogger(f"widget.{name}")

    async def fetch_count(self, session: aiohttp.ClientSession) -> int:
        """
        GET the endpoint once and return its count.

        Raises:
            CounterNetworkError, CounterHTTPError, CounterParseError
        """
        try:
            # No client-side timeout: the request lives until the page goes away
            async with session.get(self.endpoint_url, timeout=aiohttp.ClientTimeout(total=None)) as response:
                if response.status != 200:
                    raise CounterHTTPError(response.status, self.endpoint_url)
                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    raise CounterParseError(f"Invalid JSON body: {e}") from e
        except aiohttp.ClientError as e:
            raise CounterNetworkError(f"Request to {self.endpoint_url} failed: {e}") from e

        return parse_count(data)

    async def refresh(self, page: Page, session: Optional[aiohttp.ClientSession] = None) -> Optional[int]:
        """
        获取计数并写入页面

        Failures are logged and the display element is left as it was.

        Returns:
            写入的计数，失败时为 None
        """
        try:
            if session is None:
                async with aiohttp.ClientSession() as own_session:
                    count = await self.fetch_count(own_session)
            else:
                count = await self.fetch_count(session)
        except CounterFetchError as e:
            self.logger.error(f"Visit count unavailable: {e}")
            return None

        page.set_text(self.element_id, str(count))
        self.logger.info("Website called function API.")
        return count

    def attach(self, page: Page, session: Optional[aiohttp.ClientSession] = None):
        """Run `refresh` once when the page becomes ready."""
        page.add_ready_listener(lambda ready_page: self.refresh(ready_page, session))


async def render_with_counter(html: str, widget: VisitCounterWidget, wait: float = DEFAULT_RENDER_WAIT) -> str:
    """
    加载页面、等待计数写入后返回HTML

    If the count has not arrived within `wait` seconds the request is
    abandoned and the page is served with the display element untouched.
    """
    page = Page(html)
    widget.attach(page)
    page.dispatch_ready()
    try:
        await asyncio.wait_for(page.wait_until_idle(), wait)
    except asyncio.TimeoutError:
        logger.warning(f"Visit count not ready after {wait}s, serving page without it")
        await page.abandon()
    return page.render()
