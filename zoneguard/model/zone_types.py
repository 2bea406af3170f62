# ======================
# zone taxonomy
# ======================
from enum import Enum
from typing import Dict


class ZoneType(str, Enum):
    RED_ZONE = "RED_ZONE"
    AIRPORT = "AIRPORT"
    MILITARY = "MILITARY"
    EMERGENCY = "EMERGENCY"
    DID = "DID"
    YELLOW_ZONE = "YELLOW_ZONE"
    REMOTE_ID = "REMOTE_ID"
    MANNED_AIRCRAFT = "MANNED_AIRCRAFT"
    # any type string we do not recognize
    UNKNOWN = "UNKNOWN"


class Severity(str, Enum):
    DANGER = "DANGER"
    WARNING = "WARNING"
    SAFE = "SAFE"


# lower = wins when zones overlap
ZONE_PRIORITY: Dict[ZoneType, int] = {
    ZoneType.RED_ZONE: 1,
    ZoneType.AIRPORT: 2,
    ZoneType.MILITARY: 2,
    ZoneType.EMERGENCY: 3,
    ZoneType.DID: 4,
    ZoneType.YELLOW_ZONE: 5,
    ZoneType.REMOTE_ID: 6,
    ZoneType.MANNED_AIRCRAFT: 7,
    ZoneType.UNKNOWN: 99,
}

ZONE_SEVERITY: Dict[ZoneType, Severity] = {
    ZoneType.RED_ZONE: Severity.DANGER,
    ZoneType.AIRPORT: Severity.DANGER,
    ZoneType.MILITARY: Severity.DANGER,
    ZoneType.EMERGENCY: Severity.DANGER,
    ZoneType.DID: Severity.WARNING,
    ZoneType.YELLOW_ZONE: Severity.WARNING,
    ZoneType.REMOTE_ID: Severity.WARNING,
    ZoneType.MANNED_AIRCRAFT: Severity.WARNING,
    ZoneType.UNKNOWN: Severity.DANGER,
}

ZONE_COLORS: Dict[ZoneType, str] = {
    ZoneType.RED_ZONE: "#B71C1C",
    ZoneType.AIRPORT: "#9C27B0",
    ZoneType.MILITARY: "#7B1FA2",
    ZoneType.EMERGENCY: "#FF5722",
    ZoneType.DID: "#f44336",
    ZoneType.YELLOW_ZONE: "#ffc107",
    ZoneType.REMOTE_ID: "#2196F3",
    ZoneType.MANNED_AIRCRAFT: "#4CAF50",
    ZoneType.UNKNOWN: "#f44336",
}

SAFE_COLOR = "#00FF00"

SEVERITY_COLORS: Dict[Severity, str] = {
    Severity.DANGER: "#f44336",
    Severity.WARNING: "#ff9800",
    Severity.SAFE: "#4caf50",
}

SEVERITY_LABELS: Dict[Severity, str] = {
    Severity.DANGER: "Danger",
    Severity.WARNING: "Caution",
    Severity.SAFE: "Safe",
}

ZONE_TYPE_LABELS: Dict[ZoneType, str] = {
    ZoneType.RED_ZONE: "No-fly zone",
    ZoneType.AIRPORT: "Airport vicinity",
    ZoneType.MILITARY: "Military base",
    ZoneType.EMERGENCY: "Emergency airspace",
    ZoneType.DID: "Densely inhabited district",
    ZoneType.YELLOW_ZONE: "Caution zone",
    ZoneType.REMOTE_ID: "Remote ID zone",
    ZoneType.MANNED_AIRCRAFT: "Manned aircraft area",
    ZoneType.UNKNOWN: "Unknown restriction",
}


def get_zone_priority(zone_type: ZoneType) -> int:
    return ZONE_PRIORITY.get(zone_type, ZONE_PRIORITY[ZoneType.UNKNOWN])


def get_zone_severity(zone_type: ZoneType) -> Severity:
    return ZONE_SEVERITY.get(zone_type, ZONE_SEVERITY[ZoneType.UNKNOWN])


def get_zone_color(zone_type: ZoneType) -> str:
    return ZONE_COLORS.get(zone_type, ZONE_COLORS[ZoneType.UNKNOWN])


def get_severity_color(severity: Severity) -> str:
    """UI color of a severity badge (not of the zone itself)."""
    return SEVERITY_COLORS[severity]


def get_severity_label(severity: Severity) -> str:
    return SEVERITY_LABELS[severity]


def get_zone_type_label(zone_type: ZoneType) -> str:
    return ZONE_TYPE_LABELS.get(zone_type, str(zone_type.value))
