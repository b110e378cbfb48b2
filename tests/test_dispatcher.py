"""Tests for src.core.dispatcher and src.core.commands — SlidesCommandHandler."""
import asyncio

import pytest

from src.core.dispatcher import SlidesCommandHandler, is_command
from src.core.slide_store import Slide, SlideStore


class SpyStore(SlideStore):
    """SlideStore that records every dispatched action."""

    def __init__(self, slides=()):
        super().__init__(slides)
        self.actions = []

    def dispatch(self, action):
        self.actions.append(action)
        super().dispatch(action)


def run(handler, line):
    return asyncio.run(handler.run(line))


def count(handler):
    return len(handler.store.get_state().slides)


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------

class TestRouting:
    def test_unknown_command(self):
        store = SpyStore([Slide(id="s0")])
        handler = SlidesCommandHandler(store)
        result = run(handler, "make-coffee strength=9")
        assert result.success is False
        assert result.error_code == 2
        assert result.output == "Unknown command: make-coffee"
        assert store.actions == []
        assert len(handler.history) == 1

    def test_empty_line(self, handler):
        assert run(handler, "").error_code == 2

    def test_command_names_case_sensitive(self, handler):
        assert run(handler, "LIST-SLIDES").error_code == 2

    def test_alias(self, store):
        handler = SlidesCommandHandler(store, aliases={"ns": "new-slide"})
        result = run(handler, "ns slide=Extra")
        assert result.success is True
        assert count(handler) == 4
        assert handler.history.entries[-1].command == "new-slide"

    def test_alias_to_unknown_command_ignored(self, store):
        handler = SlidesCommandHandler(store, aliases={"x": "explode"})
        assert run(handler, "x").output == "Unknown command: x"

    def test_handler_error_is_caught(self, handler):
        class Boom:
            def get_state(self):
                raise RuntimeError("store offline")

        handler.store = Boom()
        result = run(handler, "list-slides")
        assert result.success is False
        assert result.error_code == 31

    def test_is_command(self):
        assert is_command("undo")
        assert not is_command("nope")


# ---------------------------------------------------------------------------
# Mutating commands
# ---------------------------------------------------------------------------

class TestNewSlide:
    def test_appends_and_records(self, handler):
        before = len(handler.history)
        result = run(handler, "new-slide slide=Summary content=Wrap")
        assert result.success is True
        assert result.error_code == 0
        assert count(handler) == 4
        assert len(handler.history) == before + 1
        assert handler.history.index == len(handler.history) - 1

        slide = handler.store.get_state().slides[-1]
        assert slide.title == "Summary"
        assert slide.content == "Wrap"
        assert slide.id.startswith("o-impress-")
        assert result.result == {"id": slide.id, "title": "Summary"}

    def test_defaults(self, handler):
        run(handler, "new-slide")
        slide = handler.store.get_state().slides[-1]
        assert slide.title == "Slide 3"
        assert slide.position.x == 3 * 900
        assert slide.position.scale == 1

    def test_bool_title_and_content(self, handler):
        run(handler, "new-slide slide=true content=false")
        slide = handler.store.get_state().slides[-1]
        assert slide.title == "true"
        assert slide.content == ""

    def test_bool_title_matches_set_slide_title(self, handler):
        run(handler, "new-slide slide=false")
        run(handler, "set-slide-title text=false slideIndex=0")
        slides = handler.store.get_state().slides
        assert slides[-1].title == "Slide 3"
        assert slides[0].title == "false"

    def test_position_params(self, handler):
        run(handler, "new-slide x=100 y=-50 rotateZ=90 scale=2")
        pos = handler.store.get_state().slides[-1].position
        assert (pos.x, pos.y, pos.rotate_z, pos.scale) == (100, -50, 90, 2)

    def test_unique_ids(self, handler):
        run(handler, "new-slide")
        run(handler, "new-slide")
        slide_ids = [s.id for s in handler.store.get_state().slides]
        assert len(slide_ids) == len(set(slide_ids))

    def test_custom_prefix(self, store):
        handler = SlidesCommandHandler(store, id_prefix="deck-")
        result = run(handler, "new-slide")
        assert result.result["id"].startswith("deck-")


class TestSetSlideTitle:
    def test_default_index_zero(self, handler):
        result = run(handler, "set-slide-title text=Agenda")
        assert result.success is True
        assert handler.store.get_state().slides[0].title == "Agenda"

    def test_index(self, handler):
        run(handler, "set-slide-title text=Second slideIndex=1")
        assert handler.store.get_state().slides[1].title == "Second"

    def test_missing_text(self, handler):
        assert run(handler, "set-slide-title").error_code == 12

    def test_bad_index(self, handler):
        result = run(handler, "set-slide-title text=X slideIndex=7")
        assert result.error_code == 13
        assert len(handler.history) == 1


class TestAddText:
    def test_defaults_to_last_slide(self, handler):
        result = run(handler, "add-text text=Point")
        assert result.result == {"slideIndex": 2, "text": "Point"}
        assert handler.store.get_state().slides[2].content == "Point"

    def test_appends_line(self, handler):
        run(handler, "add-text text=World slideIndex=1")
        assert handler.store.get_state().slides[1].content == "Hello\nWorld"

    def test_explicit_index_zero(self, handler):
        run(handler, "add-text text=Top slideIndex=0")
        assert handler.store.get_state().slides[0].content == "Top"

    def test_missing_text(self, handler):
        assert run(handler, "add-text").error_code == 21

    def test_bad_index(self, handler):
        assert run(handler, "add-text text=x slideIndex=-1").error_code == 22

    def test_empty_deck(self):
        handler = SlidesCommandHandler(SlideStore())
        assert run(handler, "add-text text=x").error_code == 22


class TestDeleteSlide:
    def test_delete(self, handler):
        result = run(handler, "delete-slide number=2")
        assert result.success is True
        assert [s.id for s in handler.store.get_state().slides] == ["s0", "s1"]
        assert result.result == {"deletedIndex": 2}

    @pytest.mark.parametrize("line", ["delete-slide number=0", "delete-slide"])
    def test_index_zero_protected(self, line):
        store = SpyStore([Slide(id="s0")])
        handler = SlidesCommandHandler(store)
        result = run(handler, line)
        assert result.error_code == 51
        assert store.actions == []

    def test_out_of_range(self, handler):
        assert run(handler, "delete-slide number=3").error_code == 52


class TestDuplicateSlide:
    def test_duplicate(self, handler):
        result = run(handler, "duplicate-slide number=1")
        slides = handler.store.get_state().slides
        assert result.success is True
        assert slides[-1].title == "Intro (copy)"
        assert slides[-1].content == "Hello"
        assert slides[-1].id == result.result["newId"]
        assert slides[-1].id != "s1"

    def test_missing_number(self, handler):
        assert run(handler, "duplicate-slide").error_code == 61

    def test_bad_number(self, handler):
        assert run(handler, "duplicate-slide number=abc").error_code == 62


# ---------------------------------------------------------------------------
# Navigation and queries
# ---------------------------------------------------------------------------

class TestGotoSlide:
    def test_goto(self, handler):
        result = run(handler, "goto-slide number=1")
        assert result.success is True
        assert [s.active for s in handler.store.get_state().slides] == [False, True, False]

    def test_not_recorded(self, handler):
        run(handler, "goto-slide number=1")
        assert len(handler.history) == 1

    def test_missing_number(self, handler):
        assert run(handler, "goto-slide").error_code == 41

    def test_out_of_range_keeps_active(self):
        store = SpyStore([Slide(id="only", active=True)])
        handler = SlidesCommandHandler(store)
        result = run(handler, "goto-slide number=999")
        assert result.error_code == 42
        assert store.get_state().slides[0].active is True
        assert store.actions == []


class TestQueries:
    def test_list_slides(self, handler):
        result = run(handler, "list-slides")
        assert result.output == "Found 3 slides"
        assert result.result[1] == {
            "index": 1, "id": "s1", "title": "Intro",
            "contentLength": 5, "position": {"x": 0, "y": 0},
        }

    def test_get_current_slide(self, handler):
        run(handler, "goto-slide number=2")
        result = run(handler, "get-current-slide")
        assert result.result["index"] == 2
        assert result.result["title"] == "Details"

    def test_get_current_falls_back_to_first(self):
        handler = SlidesCommandHandler(SlideStore([Slide(id="a"), Slide(id="b")]))
        assert run(handler, "get-current-slide").result["id"] == "a"

    def test_get_current_empty_deck(self):
        handler = SlidesCommandHandler(SlideStore())
        assert run(handler, "get-current-slide").error_code == 32

    def test_get_slides(self, handler):
        result = run(handler, "get-slides")
        assert [s["id"] for s in result.result] == ["s0", "s1", "s2"]

    def test_get_slide_info(self, handler):
        result = run(handler, "get-slide-info number=1")
        assert result.result["index"] == 1
        assert result.result["content"] == "Hello"
        assert result.result["active"] is False
        assert "rotateX" in result.result["position"]

    def test_get_slide_info_default(self, handler):
        assert run(handler, "get-slide-info").result["id"] == "s0"

    def test_get_slide_info_bad_index(self, handler):
        assert run(handler, "get-slide-info number=5").error_code == 92


# ---------------------------------------------------------------------------
# Undo / redo
# ---------------------------------------------------------------------------

class TestUndoRedo:
    def test_undo_restores_count(self, handler):
        run(handler, "new-slide")
        assert count(handler) == 4
        result = run(handler, "undo")
        assert result.success is True
        assert count(handler) == 3
        assert run(handler, "redo").success is True
        assert count(handler) == 4

    def test_undo_restores_content(self, handler):
        run(handler, "add-text text=More slideIndex=1")
        run(handler, "undo")
        assert handler.store.get_state().slides[1].content == "Hello"

    def test_nothing_to_undo(self, handler):
        for _ in range(3):
            result = run(handler, "undo")
            assert result.success is False
            assert result.error_code == 71
        assert handler.history.index == 0

    def test_repeated_undo_stays_in_bounds(self, handler):
        run(handler, "new-slide")
        run(handler, "undo")
        assert run(handler, "undo").error_code == 71
        assert handler.history.index == 0

    def test_nothing_to_redo(self, handler):
        run(handler, "new-slide")
        assert run(handler, "redo").error_code == 81

    def test_new_mutation_discards_redo(self, handler):
        run(handler, "new-slide")
        run(handler, "new-slide")
        run(handler, "undo")
        run(handler, "set-slide-title text=Fresh")
        assert run(handler, "redo").error_code == 81
        assert len(handler.history) == 3
        assert count(handler) == 4

    def test_undo_not_recorded(self, handler):
        run(handler, "new-slide")
        run(handler, "undo")
        assert len(handler.history) == 2
