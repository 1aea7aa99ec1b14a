import asyncio
import threading

from core.event_hub import EventHub


class TestEventHub:
    """In-process publish/subscribe."""

    def test_inline_dispatch_without_loop(self):
        hub = EventHub()
        received = []
        hub.subscribe("topic", lambda topic, msg: received.append((topic, msg)))
        hub.send_all_on_topic("topic", 1)
        assert received == [("topic", 1)]

    def test_subscribe_is_deduplicated(self):
        hub = EventHub()
        received = []

        def handler(topic, msg):
            received.append(msg)

        hub.subscribe("topic", handler)
        hub.subscribe("topic", handler)
        hub.send_all_on_topic("topic", "x")
        assert received == ["x"]
        assert hub.subscriber_count("topic") == 1

    def test_unsubscribe(self):
        hub = EventHub()
        received = []

        def handler(topic, msg):
            received.append(msg)

        hub.subscribe("topic", handler)
        hub.unsubscribe("topic", handler)
        hub.unsubscribe("other", handler)
        hub.send_all_on_topic("topic", "x")
        assert received == []

    def test_handler_error_does_not_stop_others(self):
        hub = EventHub()
        received = []

        def broken(topic, msg):
            raise RuntimeError("boom")

        hub.subscribe("topic", broken)
        hub.subscribe("topic", lambda topic, msg: received.append(msg))
        hub.send_all_on_topic("topic", 7)
        assert received == [7]

    def test_publish_from_other_thread_runs_on_loop(self):
        hub = EventHub()
        handler_threads = []

        async def run():
            loop = asyncio.get_running_loop()
            hub.init(loop)
            done = asyncio.Event()

            def handler(topic, msg):
                handler_threads.append(threading.get_ident())
                done.set()

            hub.subscribe("topic", handler)
            worker = threading.Thread(target=hub.send_all_on_topic, args=("topic", "from-thread"))
            worker.start()
            worker.join()
            await asyncio.wait_for(done.wait(), timeout=1.0)
            return threading.get_ident()

        loop_thread = asyncio.run(run())
        assert handler_threads == [loop_thread]

    def test_async_handler_on_loop(self):
        hub = EventHub()
        received = []

        async def handler(topic, msg):
            received.append(msg)

        async def run():
            hub.init(asyncio.get_running_loop())
            hub.subscribe("topic", handler)
            hub.send_all_on_topic("topic", "async")
            await asyncio.sleep(0)

        asyncio.run(run())
        assert received == ["async"]

    def test_async_handler_without_loop_is_skipped(self):
        hub = EventHub()
        received = []

        async def handler(topic, msg):
            received.append(msg)

        hub.subscribe("topic", handler)
        hub.send_all_on_topic("topic", "dropped")
        assert received == []
