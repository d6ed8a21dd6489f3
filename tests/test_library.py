import pytest

from retrohost.core.errors import CatalogIOError, CoverNotFound, InvalidIdentifier, RomNotFound, SaveNotFound
from retrohost.core.library import Library
from retrohost.core.tag_store import tags_path


@pytest.fixture
def populated(library, rom_dir, data_dir, make_file):
    make_file(rom_dir, "nes/Mario.nes")
    make_file(rom_dir, "Zelda.nes")
    make_file(rom_dir, "gba/Pokemon Fire Red.gba")
    make_file(rom_dir, "save.old.bak")
    make_file(rom_dir, "notes.txt")
    tags_path(data_dir).write_text('{"Mario.nes": "Platformer"}')
    return library


@pytest.mark.unit
def test_list_systems_only_includes_non_empty(populated):
    summaries = populated.list_systems()
    assert [(s.id, s.name, s.core, s.rom_count) for s in summaries] == [
        ("gba", "Game Boy Advance", "vba_next", 1),
        ("nes", "NES", "nes", 2),
    ]


@pytest.mark.unit
def test_list_roms_with_tags(populated):
    roms = {e.file_name: e for e in populated.list_roms("nes")}
    assert set(roms) == {"Mario.nes", "Zelda.nes"}
    assert roms["Mario.nes"].name == "Mario"
    assert roms["Mario.nes"].tag == "Platformer"
    assert roms["Zelda.nes"].tag == ""


@pytest.mark.unit
def test_list_roms_unknown_or_empty_system(populated):
    assert populated.list_roms("n64") == []
    assert populated.list_roms("snes") == []


@pytest.mark.unit
def test_tags_are_reloaded_on_every_call(populated, data_dir):
    tags_path(data_dir).write_text('{"Zelda.nes": "Adventure"}')
    tags = {e.file_name: e.tag for e in populated.list_roms("nes")}
    assert tags == {"Mario.nes": "", "Zelda.nes": "Adventure"}


@pytest.mark.unit
def test_malformed_tags_do_not_break_listing(populated, data_dir):
    tags_path(data_dir).write_text("{{{")
    assert len(populated.list_roms("nes")) == 2


@pytest.mark.unit
def test_rom_path_finds_nested_and_root(populated, rom_dir):
    assert populated.rom_path("nes", "Mario.nes") == rom_dir / "nes" / "Mario.nes"
    assert populated.rom_path("nes", "Zelda.nes") == rom_dir / "Zelda.nes"
    with pytest.raises(RomNotFound):
        populated.rom_path("nes", "Metroid.nes")


@pytest.mark.unit
def test_save_round_trip_and_missing(library):
    with pytest.raises(SaveNotFound):
        library.read_save("nes", "Mario")
    library.write_save("nes", "Mario", b"\x00\x01state")
    assert library.read_save("nes", "Mario") == b"\x00\x01state"


@pytest.mark.unit
def test_traversal_rejected_without_touching_disk(library, data_dir):
    with pytest.raises(InvalidIdentifier):
        library.write_save("nes", "../../etc/passwd", b"x")
    with pytest.raises(InvalidIdentifier):
        library.write_save("..", "Mario", b"x")
    assert list(data_dir.iterdir()) == []


@pytest.mark.unit
def test_cover_lookup(populated, data_dir, make_file):
    cover = make_file(data_dir, "covers/nes/Mario.jpg")
    assert populated.cover_path("nes", "Mario") == cover
    with pytest.raises(CoverNotFound):
        populated.cover_path("nes", "Zelda")
    with pytest.raises(InvalidIdentifier):
        populated.cover_path("nes", "../Mario")


@pytest.mark.unit
def test_cover_statuses(populated, data_dir, make_file):
    make_file(data_dir, "covers/nes/Mario.png")
    statuses = {s.entry.file_name: s.has_cover for s in populated.cover_statuses()}
    assert statuses == {"Pokemon Fire Red.gba": False, "Mario.nes": True, "Zelda.nes": False}


@pytest.mark.unit
def test_search_is_case_insensitive_on_name_and_file(populated):
    assert [e.file_name for e in populated.search("MARIO")] == ["Mario.nes"]
    assert [e.file_name for e in populated.search(".nes")] == ["Mario.nes", "Zelda.nes"]
    assert [e.file_name for e in populated.search("A")] == [
        "Pokemon Fire Red.gba",
        "Mario.nes",
        "Zelda.nes",
    ]
    assert populated.search("metroid") == []


@pytest.mark.unit
def test_play_url(populated):
    entry = populated.search("Fire Red")[0]
    assert populated.play_url(entry, "retro.local:8080") == (
        "http://retro.local:8080/player.html?system=gba&rom=Pokemon+Fire+Red.gba&core=vba_next"
    )


@pytest.mark.unit
def test_missing_rom_dir_surfaces(tmp_path, data_dir):
    library = Library(tmp_path / "missing", data_dir)
    with pytest.raises(CatalogIOError):
        library.list_systems()
