"""Random identifiers for stored scripts."""
from __future__ import annotations

from secrets import token_hex

MIN_ID_BYTES = 6


class IdGenerator:
    """Issue hex-encoded random tokens; collision checks belong to the caller."""

    def __init__(self, nbytes: int = MIN_ID_BYTES) -> None:
        if nbytes < MIN_ID_BYTES:
            raise ValueError(f"Script ids need at least {MIN_ID_BYTES} random bytes.")
        self.nbytes = nbytes

    def generate(self) -> str:
        return token_hex(self.nbytes)
