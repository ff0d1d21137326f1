"""Contact-related data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


PLACEHOLDER = "-"

# C0 and C1 control characters print as a space so a report stays on one line.
_CONTROL_TO_SPACE = {code: " " for code in (*range(0x00, 0x20), *range(0x7f, 0xa0))}


class ContactField(str, Enum):
    """Tags reported inside a DXLog <contactinfo> envelope."""
    CALL = "call"
    BAND = "band"
    MODE = "mode"
    MULT1 = "mult1"
    MULT2 = "mult2"
    MULT3 = "mult3"
    NEWQSO = "newqso"
    XQSO = "xqso"

    @property
    def max_length(self) -> int:
        return FIELD_MAX_LENGTHS[self]


# Longer values are truncated, never rejected.
FIELD_MAX_LENGTHS: Dict[ContactField, int] = {
    ContactField.CALL: 63,
    ContactField.BAND: 31,
    ContactField.MODE: 15,
    ContactField.MULT1: 63,
    ContactField.MULT2: 63,
    ContactField.MULT3: 63,
    ContactField.NEWQSO: 15,
    ContactField.XQSO: 15,
}

MULTIPLIER_FIELDS: Tuple[ContactField, ...] = (
    ContactField.MULT1,
    ContactField.MULT2,
    ContactField.MULT3,
)


@dataclass(frozen=True)
class ContactReport:
    """Fields extracted from one contact datagram.

    A value of None means the tag was not found; an empty string means the
    tag was present with nothing inside it.
    """
    sender: Tuple[str, int]
    call: Optional[str] = None
    band: Optional[str] = None
    mode: Optional[str] = None
    mult1: Optional[str] = None
    mult2: Optional[str] = None
    mult3: Optional[str] = None
    newqso: Optional[str] = None
    xqso: Optional[str] = None
    triggered: bool = False

    @classmethod
    def from_fields(
        cls,
        sender: Tuple[str, int],
        fields: Dict[ContactField, Optional[str]],
        triggered: bool,
    ) -> "ContactReport":
        values = {field.value: fields.get(field) for field in ContactField}
        return cls(sender=sender, triggered=triggered, **values)

    @property
    def sender_host(self) -> str:
        return self.sender[0]

    def value(self, field: ContactField) -> Optional[str]:
        return getattr(self, ContactField(field).value)

    def display_value(self, field: ContactField) -> str:
        """Value for display: a placeholder for absent or empty fields, control
        characters replaced by spaces. The stored value is left untouched.
        """
        value = self.value(field)
        if not value:
            return PLACEHOLDER
        return value.translate(_CONTROL_TO_SPACE)

    def field_values(self) -> Dict[ContactField, Optional[str]]:
        return {field: self.value(field) for field in ContactField}
