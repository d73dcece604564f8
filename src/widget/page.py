"""
In-memory HTML page
模拟浏览器文档：元素查找、文本写入、一次性 ready 事件
"""
import asyncio
import inspect
import logging
from typing import Callable, List, Optional, Set

from bs4 import BeautifulSoup
from bs4.element import Tag

logger = logging.getLogger(__name__)


class Page:
    """HTML页面"""

    def __init__(self, html: str):
        self.soup = BeautifulSoup(html, "html.parser")
        self._ready_listeners: List[Callable] = []
        self._tasks: Set[asyncio.Task] = set()
        self.is_ready = False

    def get_element_by_id(self, element_id: str) -> Optional[Tag]:
        return self.soup.find(id=element_id)

    def get_text(self, element_id: str) -> Optional[str]:
        element = self.get_element_by_id(element_id)
        if element is None:
            return None
        return element.get_text()

    def set_text(self, element_id: str, text: str):
        """替换元素的文本内容"""
        element = self.get_element_by_id(element_id)
        if element is None:
            raise KeyError(f"No element with id '{element_id}'")
        element.string = text

    def add_ready_listener(self, callback: Callable):
        """
        注册 ready 回调 (一次性)

        Listeners added after the page is ready never fire.
        """
        if self.is_ready:
            logger.debug("Page already ready, listener ignored")
            return
        self._ready_listeners.append(callback)

    def dispatch_ready(self):
        """
        触发 ready 事件

        Coroutine listeners are scheduled on the running loop and do not
        block the caller.
        """
        if self.is_ready:
            return
        self.is_ready = True

        listeners, self._ready_listeners = self._ready_listeners, []
        for callback in listeners:
            try:
                result = callback(self)
            except Exception as e:
                logger.error(f"Ready listener failed: {e}")
                continue

            if not inspect.isawaitable(result):
                continue
            try:
                task = asyncio.ensure_future(result, loop=asyncio.get_running_loop())
            except RuntimeError as e:
                # No running loop: the listener can never run
                logger.error(f"Ready listener not scheduled: {e}")
                if inspect.iscoroutine(result):
                    result.close()
                continue
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Unhandled error in page task: {error!r}")

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def wait_until_idle(self):
        """等待所有页面任务完成"""
        while self._tasks:
            tasks = list(self._tasks)
            await asyncio.gather(*tasks, return_exceptions=True)
            self._tasks.difference_update(tasks)

    async def abandon(self):
        """Cancel whatever is still in flight, like navigating away."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

    def render(self) -> str:
        return str(self.soup)
