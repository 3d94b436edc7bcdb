"""
Fixed gate catalogue.

Every organization gets these checkpoints; custom gates from the ``gates``
table are layered on top (see gate.service).
"""
from __future__ import annotations
import re
from enum import Enum


class GateLocation(str, Enum):
    main_gate = "main_gate"
    side_gate = "side_gate"
    back_gate = "back_gate"
    parking_gate = "parking_gate"
    staff_entrance = "staff_entrance"
    vip_entrance = "vip_entrance"


GATE_DESCRIPTIONS: dict[str, str] = {
    GateLocation.main_gate.value: "Primary entrance for visitors and staff",
    GateLocation.side_gate.value: "Secondary entrance for deliveries",
    GateLocation.back_gate.value: "Service entrance for maintenance",
    GateLocation.parking_gate.value: "Vehicle access control point",
    GateLocation.staff_entrance.value: "Badge-only entrance for employees",
    GateLocation.vip_entrance.value: "Escorted entrance for VIP guests",
}

GATE_CODE_RE = re.compile(r"^[a-z][a-z0-9_]{1,63}$")


def is_fixed_gate(code: str) -> bool:
    return code in GATE_DESCRIPTIONS


def format_gate_location(code: str) -> str:
    """main_gate -> Main Gate"""
    return " ".join(word.capitalize() for word in code.split("_"))
