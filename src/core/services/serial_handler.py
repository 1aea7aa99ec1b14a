import logging
import threading
from typing import Optional

import serial

from core.event_hub import TOPIC_SENSOR_READING, EventHub, event_hub
from core.stream_health import StreamHealthMonitor, stream_health

logger = logging.getLogger(__name__)


class SerialReadingSource:
    """
    Reads one JSON reading per line from a serial port (transmitter board or bridge)
    and publishes each line on the reading topic.

    The port is closed and reopened after I/O errors. Disconnects are logged once and
    reconnects once; no reading is replayed for the gap.
    """

    name = "serial"

    def __init__(self, port: str, baudrate: int = 115200, hub: Optional[EventHub] = None,
                 health: Optional[StreamHealthMonitor] = None, reopen_delay: float = 1.0):
        self.port = port
        self.baudrate = baudrate
        self.hub = hub if hub is not None else event_hub
        self.health = health if health is not None else stream_health
        self.reopen_delay = reopen_delay
        self.running = False
        self._ser: Optional[serial.Serial] = None
        self._connected = False
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def start(self):
        if self.running:
            return
        if not self.port:
            raise ValueError("A serial port must be configured in hardware mode")
        self.running = True
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name="serial-reader", daemon=True)
        self._thread.start()
        logger.info(f"Serial reader started on {self.port} @ {self.baudrate} baud")

    def stop(self):
        self.running = False
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=2.0)
            self._thread = None
        self._close()
        logger.info("Serial reader stopped")

    def _loop(self):
        while self.running:
            self.read_once()

    def read_once(self) -> Optional[str]:
        """
        Read and publish at most one line. Returns the line, or None if nothing
        was read (no data yet, or the port is down).
        """
        try:
            if self._ser is None:
                self._ser = serial.Serial(self.port, self.baudrate, timeout=0.1)
                if not self._connected:
                    logger.warning(f"[Serial] connected on {self.port} @ {self.baudrate} baud")
                    self._connected = True
                    self.health.mark_connected()
            raw = self._ser.readline()
            if not raw:
                return None
            try:
                line = raw.decode("utf-8").strip()
            except UnicodeDecodeError:
                logger.warning(f"Error decoding serial data from {self.port}")
                return None
            if line:
                self.hub.send_all_on_topic(TOPIC_SENSOR_READING, line)
                return line
            return None
        except (serial.SerialException, OSError) as e:
            if self._connected:
                logger.warning(f"[Serial] disconnected from {self.port}: {e}")
                self._connected = False
                self.health.mark_disconnected()
            self._close()
            self._stop_event.wait(self.reopen_delay)
            return None

    def _close(self):
        if self._ser is not None:
            try:
                self._ser.close()
            except (serial.SerialException, OSError) as e:
                logger.debug(f"Error closing {self.port}: {e}")
            self._ser = None
