"""
Identifier and clock provider.

The tree engine never calls uuid or datetime directly; it asks an
IdentityProvider so callers (and tests) control both.
"""
import threading
import uuid
from datetime import datetime
from typing import Optional


class IdentityProvider:
    """Hands out unique ids and non-decreasing ISO timestamps."""

    def __init__(self):
        self._lock = threading.Lock()
        self._last: Optional[str] = None

    def new_id(self, prefix: str = "s") -> str:
        return f"{prefix}_{uuid.uuid4().hex[:12]}"

    def now(self) -> str:
        stamp = datetime.now().isoformat(timespec="microseconds")
        with self._lock:
            # Wall clock may step backwards; updated_at ordering must not.
            if self._last is not None and stamp < self._last:
                stamp = self._last
            self._last = stamp
        return stamp


default_identity = IdentityProvider()


def resolve(identity: Optional[IdentityProvider]) -> IdentityProvider:
    return identity if identity is not None else default_identity
