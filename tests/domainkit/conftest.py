import pytest

from domainkit import RegistrySet


@pytest.fixture
def registries():
    """A fresh, isolated set of registries per test."""
    regs = RegistrySet()
    yield regs
    regs.clear()
