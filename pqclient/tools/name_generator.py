"""pqclient.tools.name_generator

Random alphanumeric names for temporary query files.

Not cryptographic; 128 characters over 62 symbols make collisions between
concurrent callers negligible. Seed it explicitly for deterministic tests.
"""

from __future__ import annotations
import random
import string
import threading
from typing import Optional

ALPHANUMERIC = string.ascii_lowercase + string.ascii_uppercase + string.digits
DEFAULT_NAME_LENGTH = 128


class RandomNameGenerator:
    """Thread-safe random name source."""

    def __init__(self, seed: Optional[int] = None, length: int = DEFAULT_NAME_LENGTH, charset: str = ALPHANUMERIC):
        if length <= 0:
            raise ValueError("length must be positive")
        if not charset:
            raise ValueError("charset must not be empty")
        self.length = length
        self.charset = charset
        self._rand = random.Random(seed)
        self._lock = threading.Lock()

    def next_name(self) -> str:
        with self._lock:
            return "".join(self._rand.choices(self.charset, k=self.length))
