import logging
import threading
import time
from dataclasses import dataclass, field, replace
from enum import Enum

logger = logging.getLogger(__name__)


class StreamState(Enum):
    """Reading stream connection states."""
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    STOPPED = "stopped"


@dataclass
class StreamHealthMonitor:
    """
    Tracks the health of the reading stream at the ingest boundary.
    Informational only: the registry keeps its last-known state whatever happens here.

    The serial thread reports connection changes while the loop thread records
    messages, so every update goes through `_lock`.
    """
    source: str = "none"
    max_silence_time: float = 10.0  # Seconds without messages before the stream is considered silent

    state: StreamState = StreamState.STOPPED
    last_message_time: float = 0.0
    messages_received: int = 0
    messages_rejected: int = 0
    disconnects: int = 0
    started_at: float = field(default_factory=time.time)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False, compare=False)

    def record_message(self):
        """Record that a well-formed reading arrived."""
        with self._lock:
            self.last_message_time = time.time()
            self.messages_received += 1
            if self.state == StreamState.DISCONNECTED:
                self.mark_connected()

    def record_rejected(self):
        """Record that a malformed reading was dropped."""
        with self._lock:
            self.messages_rejected += 1

    def mark_connected(self):
        with self._lock:
            if self.state != StreamState.CONNECTED:
                logger.info(f"✓ Reading stream connected ({self.source})")
                self.state = StreamState.CONNECTED

    def mark_disconnected(self):
        with self._lock:
            if self.state == StreamState.CONNECTED:
                logger.warning(f"⚠ Reading stream disconnected ({self.source})")
                self.disconnects += 1
            if self.state != StreamState.STOPPED:
                self.state = StreamState.DISCONNECTED

    def mark_stopped(self):
        with self._lock:
            self.state = StreamState.STOPPED

    def reset(self, source: str):
        """Start a fresh tracking session for a new transport."""
        with self._lock:
            self.source = source
            self.state = StreamState.DISCONNECTED
            self.last_message_time = 0.0
            self.messages_received = 0
            self.messages_rejected = 0
            self.disconnects = 0
            self.started_at = time.time()

    def get_silence_duration(self) -> float:
        """Seconds since the last message, or since start when nothing arrived yet."""
        with self._lock:
            reference = self.last_message_time or self.started_at
        return time.time() - reference

    def copy(self) -> "StreamHealthMonitor":
        """Consistent detached view of the counters."""
        with self._lock:
            return replace(self)

    def check_silence(self) -> bool:
        """Check if the stream has been silent too long."""
        return self.get_silence_duration() > self.max_silence_time


# Global instance
stream_health = StreamHealthMonitor()
