# External libs
import asyncio
import logging

# Internal libs
from core.config_loader import config_loader
from core.event_hub import init_event_hub
from core.services.fire_emulator import FireEmulator
from core.services.sensor_registry import sensor_registry
from core.services.serial_handler import SerialReadingSource
from core.services.stream_ingestor import stream_ingestor

logger = logging.getLogger(__name__)


class ServiceManager:

    def __init__(self):
        self.running = False
        self.emulation = True

    async def start_services(self, emulation: bool = True):
        """Start background services if not already started.
        Args:
            emulation: When True, feed the grid from the FireEmulator instead of the serial port.
        """
        if self.running:
            return

        logger.info("Starting background services...")
        loop = asyncio.get_running_loop()

        # Init Event Hub
        init_event_hub(loop)

        # Initial grid for the configured default location
        if sensor_registry.location is None:
            sensor_registry.load_location(config_loader.get_default_location())

        # Reading stream
        if emulation:
            transport = FireEmulator(sensor_registry, rate_hz=config_loader.get_emulation_rate())
        else:
            transport = SerialReadingSource(
                port=config_loader.get_serial_port(),
                baudrate=config_loader.get_serial_baud(),
            )
        stream_ingestor.start(transport)

        self.emulation = emulation
        self.running = True
        logger.info("Background services started.")

    async def stop_services(self):
        """Stop background services."""
        self.running = False
        try:
            await stream_ingestor.aclose()
        finally:
            # Detach the loop: later publishes run inline
            init_event_hub(None)
        logger.info("Background services stopped.")


service_manager = ServiceManager()
