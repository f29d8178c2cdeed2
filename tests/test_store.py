"""Tests for NoteStore: defaults, loading and durable appends."""

import pytest

from seisen.categories import CATEGORIES, DEFAULT_SAMPLES
from seisen.errors import StorageUnavailable, UnknownCategory
from seisen.store import NoteStore, normalize_note, parse_notes


class TestEnsureDefaults:

    def test_every_category_has_notes(self, store):
        store.ensure_defaults()
        for category in CATEGORIES:
            assert len(store.load(category)) > 0

    def test_sensei_samples(self, store):
        store.ensure_defaults()
        assert store.load("sensei_notes") == (
            "Respire profondément.",
            "Continue.",
            "Tu vas réussir.",
        )

    def test_creates_missing_parent_dirs(self, tmp_path):
        store = NoteStore(tmp_path / "deep" / "nested" / "notes")
        store.ensure_defaults()
        assert (tmp_path / "deep" / "nested" / "notes" / "zen.txt").exists()

    def test_idempotent(self, store):
        first = store.ensure_defaults()
        second = store.ensure_defaults()
        assert first == list(CATEGORIES)
        assert second == []
        assert store.load("zen") == DEFAULT_SAMPLES["zen"]

    def test_never_overwrites_existing_file(self, store, notes_dir):
        notes_dir.mkdir(parents=True)
        (notes_dir / "samurai.txt").write_text("Mon propre chemin.\n", encoding="utf-8")

        created = store.ensure_defaults()

        assert "samurai" not in created
        assert store.load("samurai") == ("Mon propre chemin.",)

    def test_samples_are_newline_terminated(self, store, notes_dir):
        store.ensure_defaults()
        content = (notes_dir / "custom.txt").read_text(encoding="utf-8")
        assert content == "Écris ta propre voie.\n"


class TestLoad:

    def test_missing_file_is_unavailable(self, store):
        with pytest.raises(StorageUnavailable) as exc_info:
            store.load("zen")
        assert exc_info.value.category == "zen"

    def test_invalid_utf8_is_unavailable(self, store, notes_dir):
        notes_dir.mkdir(parents=True)
        (notes_dir / "zen.txt").write_bytes(b"\xff\xfe\xfa broken")
        with pytest.raises(StorageUnavailable):
            store.load("zen")

    def test_blank_lines_dropped_and_order_kept(self, store, notes_dir):
        notes_dir.mkdir(parents=True)
        (notes_dir / "life.txt").write_text("\n  first \n\n\nsecond\r\n   \nthird", encoding="utf-8")
        assert store.load("life") == ("first", "second", "third")

    def test_unknown_category(self, store):
        with pytest.raises(UnknownCategory):
            store.load("nonexistent")


class TestAppend:

    def test_empty_is_noop(self, store):
        store.ensure_defaults()
        before = store.count("life")

        assert store.append("life", "") is False
        assert store.append("life", "   \n\t ") is False

        assert store.count("life") == before

    def test_round_trip_adds_exactly_one(self, store):
        store.ensure_defaults()
        before = store.load("zen").count("X")

        assert store.append("zen", "X") is True

        assert store.load("zen").count("X") == before + 1

    def test_appending_twice_keeps_both(self, store):
        store.ensure_defaults()
        store.append("custom", "Un")
        store.append("custom", "Deux")
        assert store.load("custom")[-2:] == ("Un", "Deux")

    def test_creates_missing_file(self, store, notes_dir):
        store.append("42", "Norminette first.")
        assert (notes_dir / "42.txt").read_text(encoding="utf-8") == "Norminette first.\n"

    def test_repairs_missing_trailing_newline(self, store, notes_dir):
        notes_dir.mkdir(parents=True)
        (notes_dir / "zen.txt").write_text("a\nb", encoding="utf-8")

        store.append("zen", "c")

        assert (notes_dir / "zen.txt").read_text(encoding="utf-8") == "a\nb\nc\n"
        assert store.load("zen") == ("a", "b", "c")

    def test_multiline_text_becomes_one_note(self, store):
        store.ensure_defaults()
        before = store.count("life")

        store.append("life", "  Breathe\n deeply  \n")

        notes = store.load("life")
        assert len(notes) == before + 1
        assert notes[-1] == "Breathe deeply"

    def test_unknown_category(self, store):
        with pytest.raises(UnknownCategory):
            store.append("nonexistent", "text")

    def test_write_failure_is_unavailable(self, store, notes_dir):
        # A directory where the file should be makes open() fail
        (notes_dir / "zen.txt").mkdir(parents=True)
        with pytest.raises(StorageUnavailable):
            store.append("zen", "text")


def test_normalize_note():
    assert normalize_note("  hello  ") == "hello"
    assert normalize_note("a\r\nb\n\nc") == "a b c"
    assert normalize_note(" \n ") == ""


def test_parse_notes():
    assert parse_notes("") == ()
    assert parse_notes("one\n\ntwo\n") == ("one", "two")
