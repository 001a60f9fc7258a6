import pytest

from cardkeeper.services.inventory import InventorySystem


@pytest.fixture
def inventory() -> InventorySystem:
    """A fresh, empty inventory."""
    return InventorySystem()
