"""
Tests for saved blueprint profiles and file exchange.
"""
import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from focusdesk.blueprint.exporter import parse
from focusdesk.blueprint.files import read_text_file, export_filename, export_ir, export_kcs
from focusdesk.blueprint.profiles import ProfileStore, PROFILES_KEY, make_profile
from focusdesk.blueprint.schema import Blueprint, SavedProfile, ExportFormat

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


def _profile(name: str) -> SavedProfile:
    return SavedProfile(
        name=name,
        content=Blueprint(ir=f"# {name}", kcs=f"facts about {name}", kcs_format=ExportFormat.JSON),
        saved_at="2024-01-02T03:04:05.678Z",
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Profile Store
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_load_all_empty_when_absent(kv):
    assert ProfileStore(kv).load_all() == []


def test_save_then_load_by_index(kv):
    """A saved profile reads back deep-equal at the same index"""
    store = ProfileStore(kv)
    first = _profile("alpha")
    second = _profile("beta")
    assert store.append(first) == 0
    assert store.append(second) == 1

    assert store.get(0) == first
    assert store.get(1) == second
    # also through a fresh store instance
    assert ProfileStore(kv).load_all() == [first, second]


def test_remove_at_shrinks_by_one_and_keeps_order(kv):
    store = ProfileStore(kv)
    profiles = [_profile(n) for n in ("a", "b", "c", "d")]
    store.save_all(profiles)

    removed = store.remove_at(1)
    assert removed.name == "b"
    remaining = store.load_all()
    assert len(remaining) == 3
    assert [p.name for p in remaining] == ["a", "c", "d"]


def test_remove_at_out_of_range(kv):
    store = ProfileStore(kv)
    store.save_all([_profile("only")])
    with pytest.raises(IndexError):
        store.remove_at(1)
    with pytest.raises(IndexError):
        store.remove_at(-1)
    assert len(store.load_all()) == 1


def test_clear_removes_stored_profiles(kv):
    store = ProfileStore(kv)
    store.save_all([_profile("a"), _profile("b")])
    assert store.clear()
    assert kv.get(PROFILES_KEY) is None
    assert store.load_all() == []
    assert not store.clear()


def test_save_all_overwrites_whole_collection(kv):
    store = ProfileStore(kv)
    store.save_all([_profile("a"), _profile("b")])
    store.save_all([_profile("c")])
    assert [p.name for p in store.load_all()] == ["c"]


def test_stored_wire_shape(kv):
    store = ProfileStore(kv)
    store.append(_profile("alpha"))
    stored = json.loads(kv.get(PROFILES_KEY))
    assert stored == [{
        "name": "alpha",
        "data": {"ir": "# alpha", "kcs": "facts about alpha", "kcsFormat": "json"},
        "timestamp": "2024-01-02T03:04:05.678Z",
    }]


def test_malformed_json_fails_soft(kv):
    kv.set(PROFILES_KEY, "[{broken")
    store = ProfileStore(kv)
    assert store.load_all() == []
    store.append(_profile("fresh"))
    assert [p.name for p in store.load_all()] == ["fresh"]


def test_non_list_value_fails_soft(kv):
    kv.set(PROFILES_KEY, '"just a string"')
    assert ProfileStore(kv).load_all() == []


def test_malformed_entries_are_skipped(kv):
    good = _profile("good").to_dict()
    kv.set(PROFILES_KEY, json.dumps([
        good,
        {"name": "no data"},
        {"name": "bad format", "data": {"ir": "", "kcs": "", "kcsFormat": "xml"}},
        42,
    ]))
    assert [p.name for p in ProfileStore(kv).load_all()] == ["good"]


class TestSaveBlueprint:

    def test_blank_name_aborts_silently(self, kv):
        store = ProfileStore(kv)
        assert store.save_blueprint(None, Blueprint(ir="x")) is None
        assert store.save_blueprint("", Blueprint(ir="x")) is None
        assert store.save_blueprint("   ", Blueprint(ir="x")) is None
        assert kv.get(PROFILES_KEY) is None

    def test_normalizes_ir_on_save(self, kv):
        store = ProfileStore(kv)
        blueprint = Blueprint(ir="Be concise.", kcs="Paris is in France.", kcs_format=ExportFormat.JSONL)
        profile = store.save_blueprint("geo bot", blueprint, now=FIXED_NOW)

        assert profile.content.ir == "# AI Model Instructions\n\nBe concise."
        assert profile.content.kcs == "Paris is in France."
        assert profile.content.kcs_format is ExportFormat.JSONL
        assert profile.saved_at == "2024-01-02T03:04:05.678Z"
        assert store.load_all() == [profile]

    def test_names_need_not_be_unique(self, kv):
        store = ProfileStore(kv)
        store.save_blueprint("same", Blueprint(ir="# one"))
        store.save_blueprint("same", Blueprint(ir="# two"))
        assert [p.content.ir for p in store.load_all()] == ["# one", "# two"]

    def test_custom_default_header(self, kv):
        store = ProfileStore(kv, default_header="Persona")
        profile = store.save_blueprint("p", Blueprint(ir="hi"))
        assert profile.content.ir == "# Persona\n\nhi"


def test_make_profile_keeps_original_blueprint_untouched():
    blueprint = Blueprint(ir="raw")
    profile = make_profile("n", blueprint, now=FIXED_NOW)
    assert blueprint.ir == "raw"
    assert profile.content.ir.startswith("# AI Model Instructions")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# File exchange
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_read_text_file_cancelled_is_noop():
    assert read_text_file(None) is None
    assert read_text_file("") is None


def test_read_text_file_reads_whole_content(tmp_path):
    path = tmp_path / "rules.txt"
    path.write_text("line one\nline two\n")
    assert read_text_file(path) == "line one\nline two\n"
    assert read_text_file(str(path)) == "line one\nline two\n"


def test_read_text_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_text_file(tmp_path / "missing.txt")


def test_export_filename():
    assert export_filename("ir", "md", FIXED_NOW) == "ir_1704164645678.md"
    assert export_filename("kcs", "jsonl", FIXED_NOW) == "kcs_1704164645678.jsonl"


def test_export_ir_writes_markdown(tmp_path):
    dest = export_ir(Blueprint(ir="Stay on topic."), tmp_path / "out", now=FIXED_NOW)
    assert dest == tmp_path / "out" / "ir_1704164645678.md"
    assert dest.read_text() == "# AI Model Instructions\n\nStay on topic."


@pytest.mark.parametrize("fmt", [ExportFormat.JSON, ExportFormat.JSONL])
def test_export_kcs_writes_chunks(tmp_path, fmt):
    blueprint = Blueprint(kcs="a b c d e", kcs_format=fmt)
    dest = export_kcs(blueprint, tmp_path, chunk_size=2, now=FIXED_NOW)
    assert Path(dest).name == f"kcs_1704164645678.{fmt.value}"

    chunks = parse(Path(dest).read_text(), fmt)
    assert [c.content for c in chunks] == ["a b", "c d", "e"]
    assert all(c.id.endswith("_1704164645678") for c in chunks)


def test_export_kcs_empty_text_writes_empty_export(tmp_path):
    dest = export_kcs(Blueprint(kcs=""), tmp_path, now=FIXED_NOW)
    assert json.loads(Path(dest).read_text()) == {"chunks": []}
