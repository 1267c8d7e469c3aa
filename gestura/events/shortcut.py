"""
Shortcuts - Structural keys used to bind gestures to behavior.

A shortcut is derived from an event: its gesture id and modifier mask, plus
an extra discriminator for key events (the character) and tap events (the
click count). Application code compares shortcuts with matches():

    if event.shortcut().matches(TapShortcut(id=LEFT, count=2)):
        ...
"""
from pydantic import BaseModel, ConfigDict, field_validator

from gestura.events.event import NO_ID, NO_MODIFIER_MASK


class Shortcut(BaseModel):
    """Gesture id plus modifier mask.

    Attributes:
        modifiers: Modifier bitmask
        id: Gesture id
    """
    modifiers: int = NO_MODIFIER_MASK
    id: int = NO_ID

    model_config = ConfigDict(frozen=True)

    def matches(self, other: 'Shortcut') -> bool:
        """Return True if both shortcuts are the same kind with equal fields.

        No wildcards: a Shortcut never matches a KeyShortcut or TapShortcut,
        even when id and modifiers agree.
        """
        if type(self) is not type(other):
            return False
        return self.id == other.id and self.modifiers == other.modifiers


class KeyShortcut(Shortcut):
    """Key event shortcut.

    Either a character (e.g. 'a') or a virtual key combined with a
    modifier mask (e.g. CTRL + the virtual key for 'a'). Character shortcuts
    leave id and modifiers empty; virtual key shortcuts leave key as ''.
    """
    key: str = ''

    def matches(self, other: Shortcut) -> bool:
        if super().matches(other):
            return self.key == other.key
        return False


class TapShortcut(Shortcut):
    """Tap (click) shortcut: gesture id, modifiers and number of clicks."""
    count: int = 1

    @field_validator('count')
    @classmethod
    def normalize_count(cls, v: int) -> int:
        """Non-positive click counts mean a single click."""
        return v if v > 0 else 1

    def matches(self, other: Shortcut) -> bool:
        if super().matches(other):
            return self.count == other.count
        return False
