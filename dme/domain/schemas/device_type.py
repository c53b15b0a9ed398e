from enum import Enum
from typing import Optional


class Device_type(str, Enum):
    CPAP = "CPAP"
    OXYGEN_TANK = "OxygenTank"
    WHEELCHAIR = "Wheelchair"
    UNKNOWN = "Unknown"

    @classmethod
    def normalize(cls, value: Optional[str]) -> "Device_type":
        """Map a free-form device label ("Oxygen Tank", "cpap") onto the vocabulary."""
        if not value:
            return cls.UNKNOWN
        key = "".join(value.split()).lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        return cls.UNKNOWN
