"""
Identifier generators for stored transactions.
"""

import threading
import uuid

from apps.transactions.domain.interfaces import BaseIdentifierGenerator


class UUIDIdentifierGenerator(BaseIdentifierGenerator):
    """Generates random UUIDs. Used in production."""

    def new_id(self) -> str:
        return str(uuid.uuid4())


class SequentialIdentifierGenerator(BaseIdentifierGenerator):
    """
    Generates predictable ids (sequentialID-1, sequentialID-2, ...).
    Useful for tests and local development where ids must be known upfront.
    """

    def __init__(self, prefix: str = "sequentialID"):
        self.prefix = prefix
        self._previous_id = 0
        self._lock = threading.Lock()

    def new_id(self) -> str:
        with self._lock:
            self._previous_id += 1
            return f"{self.prefix}-{self._previous_id}"


class IdentifierGeneratorName:
    UUID = "uuid"
    SEQUENTIAL = "sequential"


# Registry: Maps generator names (TRANSACTION_ID_GENERATOR setting) to classes
ID_GENERATOR_REGISTRY: dict[str, type[BaseIdentifierGenerator]] = {
    IdentifierGeneratorName.UUID: UUIDIdentifierGenerator,
    IdentifierGeneratorName.SEQUENTIAL: SequentialIdentifierGenerator,
}
