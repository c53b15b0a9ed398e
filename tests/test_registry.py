"""
Tests for the device extractor registry.
"""

import pytest

from dme.service.cpap_extractor_service import CpapExtractorService
from dme.service.device_registry_service import DeviceExtractorRegistry
from dme.service.oxygen_tank_extractor_service import OxygenTankExtractorService


class TestDeviceExtractorRegistry:
    """Test dispatch by device type."""

    def test_default_registry_contents(self, registry):
        assert len(registry) == 2
        assert sorted(registry.device_types) == ["CPAP", "OxygenTank"]
        assert "CPAP" in registry
        assert "Wheelchair" not in registry

    def test_lookup(self, registry):
        assert isinstance(registry.lookup("CPAP"), CpapExtractorService)
        assert isinstance(registry.lookup("OxygenTank"), OxygenTankExtractorService)

    def test_lookup_is_exact(self, registry):
        assert registry.lookup("cpap") is None
        assert registry.lookup("Wheelchair") is None

    @pytest.mark.parametrize("key", ["", "   ", None])
    def test_blank_key_returns_none(self, registry, key):
        assert registry.lookup(key) is None

    def test_duplicate_device_type_rejected(self):
        with pytest.raises(ValueError, match="duplicate extractor for device type 'CPAP'"):
            DeviceExtractorRegistry([CpapExtractorService(), CpapExtractorService()])

    def test_registry_is_read_only(self, registry):
        with pytest.raises(TypeError):
            registry._extractors["Wheelchair"] = CpapExtractorService()
