import pytest

from retrohost.core import save_store
from retrohost.core.errors import InvalidIdentifier, PayloadTooLarge, SaveIOError, SaveNotFound


@pytest.mark.unit
def test_save_path_layout(data_dir):
    assert save_store.save_path(data_dir, "nes", "Mario") == data_dir / "saves" / "nes" / "Mario.sav"


@pytest.mark.unit
@pytest.mark.parametrize("system, rom", [
    ("nes", "../Mario"),
    ("nes", ".."),
    ("..", "Mario"),
    ("nes", "sub/Mario"),
    ("n/es", "Mario"),
    ("nes", "sub\\Mario"),
    ("nes", ""),
    ("", "Mario"),
    ("nes", "Mario\x00"),
    ("nes", "."),
])
def test_invalid_identifiers_rejected(data_dir, system, rom):
    with pytest.raises(InvalidIdentifier):
        save_store.save_path(data_dir, system, rom)


@pytest.mark.unit
def test_dots_inside_names_are_allowed(data_dir):
    path = save_store.save_path(data_dir, "gba", "Pokemon v1.1 (USA)")
    assert path.name == "Pokemon v1.1 (USA).sav"


@pytest.mark.unit
def test_read_missing_save(data_dir):
    with pytest.raises(SaveNotFound):
        save_store.read_save(save_store.save_path(data_dir, "nes", "Mario"))


@pytest.mark.unit
def test_write_then_read_round_trip(data_dir):
    path = save_store.save_path(data_dir, "nes", "Mario")
    payload = bytes(range(256)) * 4

    save_store.write_save(path, payload)

    assert save_store.read_save(path) == payload


@pytest.mark.unit
def test_write_replaces_content_and_leaves_no_temp_files(data_dir):
    path = save_store.save_path(data_dir, "gb", "Tetris")
    save_store.write_save(path, b"first save, longer")
    save_store.write_save(path, b"second")

    assert save_store.read_save(path) == b"second"
    assert sorted(p.name for p in path.parent.iterdir()) == ["Tetris.sav"]


@pytest.mark.unit
def test_empty_payload_is_a_valid_save(data_dir):
    path = save_store.save_path(data_dir, "gb", "Tetris")
    save_store.write_save(path, b"")
    assert save_store.read_save(path) == b""


@pytest.mark.unit
def test_payload_at_cap_is_accepted(data_dir):
    path = save_store.save_path(data_dir, "gba", "Big")
    save_store.write_save(path, b"\x01" * 16, limit=16)
    assert save_store.read_save(path) == b"\x01" * 16


@pytest.mark.unit
def test_oversized_payload_rejected_before_any_write(data_dir):
    path = save_store.save_path(data_dir, "gba", "Big")

    with pytest.raises(PayloadTooLarge) as exc:
        save_store.write_save(path, b"\x01" * 17, limit=16)

    assert exc.value.limit == 16
    assert not (data_dir / "saves").exists()


@pytest.mark.unit
def test_default_cap_is_ten_mib():
    assert save_store.MAX_SAVE_BYTES == 10 * 1024 * 1024


@pytest.mark.unit
def test_write_failure_is_surfaced(data_dir):
    # saves/nes is a file, so the slot directory cannot be created
    (data_dir / "saves").mkdir()
    (data_dir / "saves" / "nes").write_text("not a directory")
    path = save_store.save_path(data_dir, "nes", "Mario")

    with pytest.raises(SaveIOError):
        save_store.write_save(path, b"data")
