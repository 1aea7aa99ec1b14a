"""Fire origin estimate and cosmetic fire marker."""
from dataclasses import dataclass


@dataclass(frozen=True)
class FireOrigin:
    """Weighted-centroid estimate in axial hex coordinates."""
    q: int
    r: int
    contributing: int = 0
    total_weight: int = 0


@dataclass(frozen=True)
class FireMarker:
    """UI-only annotation. Has no effect on telemetry or on the origin estimate."""
    q: int
    r: int
    intensity: float = 1.0
