"""
Key Event - Keyboard input reduced to a KeyShortcut.

Key events take one of two forms:
1. A single character (e.g. 'a'), with no id or modifiers.
2. A virtual key code as the id plus a modifier mask (e.g. ALT | SHIFT).

Virtual key codes report which key was pressed rather than the character a
combination of keystrokes produced; their values are platform dependent and
are supplied by the feeding collaborator.
"""
from typing import ClassVar

from pydantic import model_validator

from gestura.events.event import Event, EventKind, NO_ID, NO_MODIFIER_MASK
from gestura.events.shortcut import KeyShortcut


class KeyEvent(Event):
    """Immutable key event.

    Attributes:
        key: The typed character, or '' for virtual key events
    """
    kind: ClassVar[EventKind] = EventKind.KEY

    key: str = ''

    @model_validator(mode='after')
    def check_form(self) -> 'KeyEvent':
        """Character events carry no virtual key or modifiers."""
        if self.key and (self.id != NO_ID or self.modifiers != NO_MODIFIER_MASK):
            raise ValueError('A character key event cannot carry a virtual key or modifiers')
        if len(self.key) > 1:
            raise ValueError(f'Key must be a single character, got {self.key!r}')
        return self

    @classmethod
    def from_char(cls, char: str, **kwargs) -> 'KeyEvent':
        """Build a character key event."""
        return cls(key=char, **kwargs)

    @classmethod
    def from_virtual_key(cls, vk: int, modifiers: int = NO_MODIFIER_MASK, **kwargs) -> 'KeyEvent':
        """Build a virtual key event."""
        return cls(id=vk, modifiers=modifiers, **kwargs)

    def is_character(self) -> bool:
        return self.key != ''

    def shortcut(self) -> KeyShortcut:
        if self.is_character():
            return KeyShortcut(key=self.key)
        return KeyShortcut(modifiers=self.modifiers, id=self.id)
