"""Input-layer public API for key decoding and the abstract action map.

Exports are intentionally split between low-level terminal decoding
(`read_key`) and the mode-aware keymap used by the event dispatcher.
"""

from .keymap import Action, InputMode, KeyBinding, KeyComboRegistry, Keymap
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "Action",
    "InputMode",
    "KeyBinding",
    "KeyComboRegistry",
    "Keymap",
]
