from core.models.alert_level import AlertLevel

# (level, temperature threshold, smoke threshold), highest first.
# Comparisons are strict: a value equal to a threshold does not trip it.
ALERT_THRESHOLDS = (
    (AlertLevel.HIGH, 80.0, 80.0),
    (AlertLevel.MEDIUM, 60.0, 60.0),
    (AlertLevel.LOW, 40.0, 30.0),
)


def classify(temperature: float, smoke_level: float) -> AlertLevel:
    """Return the highest alert level tripped by either signal."""
    for level, temp_threshold, smoke_threshold in ALERT_THRESHOLDS:
        if temperature > temp_threshold or smoke_level > smoke_threshold:
            return level
    return AlertLevel.NONE
