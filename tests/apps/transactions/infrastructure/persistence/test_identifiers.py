import uuid
from concurrent.futures import ThreadPoolExecutor

from apps.transactions.infrastructure.persistence.identifiers import (
    ID_GENERATOR_REGISTRY,
    IdentifierGeneratorName,
    SequentialIdentifierGenerator,
    UUIDIdentifierGenerator,
)


def test_uuid_generator_returns_valid_uuid():
    value = UUIDIdentifierGenerator().new_id()

    assert str(uuid.UUID(value)) == value


def test_uuid_generator_is_unique():
    generator = UUIDIdentifierGenerator()

    assert generator.new_id() != generator.new_id()


def test_sequential_generator_is_predictable():
    generator = SequentialIdentifierGenerator()

    assert [generator.new_id() for _ in range(3)] == ["sequentialID-1", "sequentialID-2", "sequentialID-3"]


def test_sequential_generator_custom_prefix():
    assert SequentialIdentifierGenerator(prefix="txn").new_id() == "txn-1"


def test_sequential_generator_is_thread_safe():
    generator = SequentialIdentifierGenerator()

    with ThreadPoolExecutor(max_workers=8) as executor:
        ids = list(executor.map(lambda _: generator.new_id(), range(500)))

    assert len(set(ids)) == 500


def test_registry_contains_generators():
    assert ID_GENERATOR_REGISTRY[IdentifierGeneratorName.UUID] is UUIDIdentifierGenerator
    assert ID_GENERATOR_REGISTRY[IdentifierGeneratorName.SEQUENTIAL] is SequentialIdentifierGenerator
