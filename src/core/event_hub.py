import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

# Raw reading payloads from a transport (serial line, emulator dict, HTTP body)
TOPIC_SENSOR_READING = "sensor_reading"
# GridSnapshot published after every registry mutation
TOPIC_GRID_UPDATE = "grid_update"


class EventHub:
    """
    In-process publish/subscribe.

    Handlers are called as handler(topic, message). When a loop is attached, messages
    published from another thread are marshalled onto that loop so that subscribers
    only ever run on the loop thread.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def init(self, loop: Optional[asyncio.AbstractEventLoop]):
        self._loop = loop

    def subscribe(self, topic: str, handler: Callable):
        handlers = self._subscribers.setdefault(topic, [])
        if handler not in handlers:
            handlers.append(handler)
        logger.debug(f"Subscribed to {topic}")

    def unsubscribe(self, topic: str, handler: Callable):
        handlers = self._subscribers.get(topic)
        if handlers and handler in handlers:
            handlers.remove(handler)
            logger.debug(f"Unsubscribed from {topic}")

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, []))

    def send_all_on_topic(self, topic: str, message: Any):
        # Copy so handlers may unsubscribe while we iterate
        for handler in self._subscribers.get(topic, [])[:]:
            try:
                self._dispatch(handler, topic, message)
            except Exception as e:
                logger.error(f"Error handling message on topic {topic}: {e}")

    def _dispatch(self, handler: Callable, topic: str, message: Any):
        is_async = asyncio.iscoroutinefunction(handler)

        if self._loop is None or self._loop.is_closed():
            if is_async:
                logger.warning(f"EventHub loop not initialized. Cannot dispatch async handler for {topic}")
                return
            handler(topic, message)
            return

        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        if current_loop is self._loop:
            if is_async:
                self._loop.create_task(handler(topic, message))
            else:
                handler(topic, message)
        elif is_async:
            asyncio.run_coroutine_threadsafe(handler(topic, message), self._loop)
        else:
            self._loop.call_soon_threadsafe(handler, topic, message)


# Global instance
event_hub = EventHub()


def init_event_hub(loop):
    """Initialize the global event hub with the given loop."""
    event_hub.init(loop)
