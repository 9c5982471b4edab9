"""Rotating temporary file names for generated macros.

The host compiles each script next to its source and may still hold the
compiled output for a moment after the macro returns, so successive runs
rotate through a small pool of names instead of reusing one.
"""
import random
import threading
from typing import Optional

from .utils import MACRO_FILE_FORMAT, MAX_TEMP_FILES


class SlotAllocator:
    def __init__(self, slot_count: int = MAX_TEMP_FILES, name_format: str = MACRO_FILE_FORMAT,
                 rng: Optional[random.Random] = None):
        if slot_count < 1:
            raise ValueError("slot_count must be at least 1")
        self.slot_count = slot_count
        self.name_format = name_format
        self._rng = rng or random.Random()
        self._index = -1
        self._lock = threading.Lock()

    def next_index(self) -> int:
        """Advance the cursor, seeding it at a random slot on first use."""
        with self._lock:
            if self._index < 0:
                self._index = self._rng.randrange(self.slot_count)
            else:
                self._index = (self._index + 1) % self.slot_count
            return self._index

    def next_name(self) -> str:
        return self.name_format.format(self.next_index())


_default_allocator = SlotAllocator()


def default_allocator() -> SlotAllocator:
    """Return the allocator shared by every runner in this process."""
    return _default_allocator
