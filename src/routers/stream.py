from fastapi import APIRouter

from core.services.stream_ingestor import stream_ingestor
from schemas import StreamStatus

router = APIRouter(prefix="/stream", tags=["stream"])


@router.get("/status", response_model=StreamStatus)
async def get_stream_status() -> StreamStatus:
    """Health of the reading stream as seen from the ingest boundary."""
    health = stream_ingestor.health.copy()
    return StreamStatus(
        running=stream_ingestor.running,
        source=health.source,
        state=health.state,
        messagesReceived=health.messages_received,
        messagesRejected=health.messages_rejected,
        disconnects=health.disconnects,
        silenceSeconds=round(health.get_silence_duration(), 3),
    )
