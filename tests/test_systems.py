import pytest

from retrohost.core.systems import DEFAULT_SYSTEMS, SystemRegistry, default_registry
from retrohost.models.system import SystemDescriptor


@pytest.mark.unit
def test_default_registry_order_and_lookup():
    registry = default_registry()
    assert [s.id for s in registry.all()] == ["gb", "gbc", "gba", "nes", "snes"]
    assert registry.by_id("gba").core == "vba_next"
    assert registry.by_extension(".sfc").id == "snes"
    assert registry.by_extension(".SMC").id == "snes"
    assert registry.by_extension("nes").id == "nes"


@pytest.mark.unit
def test_missing_lookups_return_none():
    registry = default_registry()
    assert registry.by_id("n64") is None
    assert registry.by_extension(".z64") is None
    assert registry.by_extension("") is None
    assert "n64" not in registry
    assert "gb" in registry
    assert len(registry) == len(DEFAULT_SYSTEMS)


@pytest.mark.unit
def test_extensions_are_unique_across_default_systems():
    seen = {}
    for system in DEFAULT_SYSTEMS:
        for ext in system.extensions:
            assert ext not in seen, f"{ext} shared by {seen.get(ext)} and {system.id}"
            seen[ext] = system.id


@pytest.mark.unit
def test_duplicate_extension_rejected():
    with pytest.raises(ValueError, match="extension"):
        SystemRegistry([
            SystemDescriptor(id="a", name="A", core="a", extensions=(".bin",)),
            SystemDescriptor(id="b", name="B", core="b", extensions=(".BIN",)),
        ])


@pytest.mark.unit
def test_duplicate_id_rejected():
    with pytest.raises(ValueError, match="duplicate system id"):
        SystemRegistry([
            SystemDescriptor(id="a", name="A", core="a", extensions=(".a",)),
            SystemDescriptor(id="a", name="A2", core="a", extensions=(".b",)),
        ])


@pytest.mark.unit
def test_descriptor_is_immutable():
    system = default_registry().by_id("nes")
    with pytest.raises(AttributeError):
        system.id = "famicom"
