"""
Page model

A parsed storefront page plus the browser facilities the cart relies on:
event listeners bound to elements, a setTimeout-style timer queue,
window.location for redirects, and user-visible alerts.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)


@dataclass
class Location:
    """Current page location"""
    origin: str
    href: str
    history: list[str] = field(default_factory=list)

    def assign(self, url: str) -> None:
        """Navigate to url"""
        self.history.append(self.href)
        self.href = url
        logger.info(f"Navigating to {url}")


class Page:
    """A storefront page the cart is rendered into"""

    def __init__(self, html: str, url: str = "http://localhost:4000/"):
        self.soup = BeautifulSoup(html, "lxml")
        self.location = Location(origin=_origin_of(url), href=url)
        self.alerts: list[str] = []
        self.time = 0.0

        # Keyed by id(element); the element is held so its id stays unique
        self._listeners: dict[int, tuple[Tag, dict[str, list[Callable[[], Any]]]]] = {}
        self._timers: list[tuple[float, int, Callable[[], Any]]] = []
        self._timer_ids = itertools.count(1)
        self._cancelled_timers: set[int] = set()

    # ==================== Document ====================

    @property
    def body(self) -> Tag:
        if self.soup.body is None:
            body = self.soup.new_tag("body")
            (self.soup.html or self.soup).append(body)
        return self.soup.body

    def select(self, selector: str) -> list[Tag]:
        return self.soup.select(selector)

    def get_element_by_id(self, element_id: str) -> Optional[Tag]:
        return self.soup.find(id=element_id)

    def parse_fragment(self, html: str) -> list[Any]:
        """Parse markup into nodes that can be appended to this page"""
        fragment = BeautifulSoup(html, "html.parser")
        return list(fragment.contents)

    def html(self) -> str:
        return str(self.soup)

    # ==================== Events ====================

    def add_event_listener(self, element: Tag, event: str, handler: Callable[[], Any]) -> None:
        _, handlers = self._listeners.setdefault(id(element), (element, {}))
        handlers.setdefault(event, []).append(handler)

    def release_listeners(self, root: Tag) -> None:
        """Drop listeners bound to root's descendants"""
        for element in root.find_all(True):
            self._listeners.pop(id(element), None)

    def dispatch(self, element: Tag, event: str) -> list[Any]:
        """Run the handlers bound to element for event, returning their results"""
        entry = self._listeners.get(id(element))
        if entry is None or entry[0] is not element:
            return []
        return [handler() for handler in list(entry[1].get(event, []))]

    def click(self, element: Tag) -> list[Any]:
        # Disabled controls do not receive clicks
        if element.has_attr("disabled"):
            return []
        return self.dispatch(element, "click")

    # ==================== Timers ====================

    def set_timeout(self, delay: float, callback: Callable[[], Any]) -> int:
        timer_id = next(self._timer_ids)
        heapq.heappush(self._timers, (self.time + delay, timer_id, callback))
        return timer_id

    def clear_timeout(self, timer_id: int) -> None:
        self._cancelled_timers.add(timer_id)

    def advance(self, seconds: float) -> None:
        """Move page time forward, firing every timer that comes due"""
        deadline = self.time + seconds
        while self._timers and self._timers[0][0] <= deadline:
            due, timer_id, callback = heapq.heappop(self._timers)
            self.time = due
            if timer_id in self._cancelled_timers:
                self._cancelled_timers.discard(timer_id)
                continue
            callback()
        self.time = deadline

    @property
    def pending_timers(self) -> int:
        return sum(1 for _, timer_id, _ in self._timers if timer_id not in self._cancelled_timers)

    # ==================== Dialogs ====================

    def alert(self, message: str) -> None:
        logger.info(f"Alert: {message}")
        self.alerts.append(message)


def _origin_of(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"
