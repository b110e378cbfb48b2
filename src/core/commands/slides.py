"""Slide commands for SlidesCommandHandler.

new-slide, set-slide-title, add-text, list-slides, get-current-slide,
goto-slide, delete-slide, duplicate-slide, get-slides, get-slide-info

Each function takes the handler and the decoded params and returns a
CommandResult.  Errors never escape: the last code of each command's
block reports an unexpected exception.
"""
from __future__ import annotations

import time
from dataclasses import replace
from typing import Any

from src.core.params import ParamValue, to_int
from src.core.results import CommandResult
from src.core.slide_store import (
    Slide, Transform, AddSlide, EditSlide, SetActiveSlide, DeleteActiveSlide,
)
from src.core.constants import (
    COPY_SUFFIX,
    ERR_NEW_SLIDE,
    ERR_TITLE_MISSING, ERR_TITLE_INDEX, ERR_TITLE_FAILED,
    ERR_TEXT_MISSING, ERR_TEXT_INDEX, ERR_TEXT_FAILED,
    ERR_LIST_FAILED, ERR_CURRENT_FAILED,
    ERR_GOTO_MISSING, ERR_GOTO_INDEX, ERR_GOTO_FAILED,
    ERR_DELETE_PROTECTED, ERR_DELETE_INDEX, ERR_DELETE_FAILED,
    ERR_DUPLICATE_MISSING, ERR_DUPLICATE_INDEX, ERR_DUPLICATE_FAILED,
    ERR_GET_SLIDES_FAILED, ERR_INFO_INDEX, ERR_INFO_FAILED,
)

Params = dict[str, ParamValue]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _new_slide_id(self, slides: list[Slide]) -> str:
    """``<prefix><epoch ms>``, bumped until unique within the deck."""
    taken = {s.id for s in slides}
    stamp = int(time.time() * 1000)
    while f"{self.id_prefix}{stamp}" in taken:
        stamp += 1
    return f"{self.id_prefix}{stamp}"


def _valid_index(index: int | None, slides: list[Slide]) -> bool:
    return index is not None and 0 <= index < len(slides)


def _int_or(params: Params, key: str, default: int) -> int:
    value = to_int(params.get(key))
    return default if value is None else value


def _as_text(value: ParamValue) -> str:
    """Script text for a decoded value: bools read back as true / false."""
    return str(value).lower() if isinstance(value, bool) else str(value)


def _text(params: Params) -> str | None:
    """The ``text`` param as a string, None when missing or empty."""
    text = params.get("text")
    if text is None or text == "":
        return None
    return _as_text(text)


# ---------------------------------------------------------------------------
# Mutating commands
# ---------------------------------------------------------------------------

async def cmd_new_slide(self, params: Params) -> CommandResult:
    """new-slide [slide=title] [content=…] [x= y= z= scale= rotate= rotateX= rotateY= rotateZ=]"""
    try:
        slides = self.slides()
        scale = params.get("scale")
        title = params.get("slide")
        slide = Slide(
            id      = _new_slide_id(self, slides),
            title   = _as_text(title) if title else f"Slide {len(slides)}",
            content = _as_text(params.get("content") or ""),
            position = Transform(
                x        = _int_or(params, "x", len(slides) * self.spacing_x),
                y        = _int_or(params, "y", 0),
                z        = _int_or(params, "z", 0),
                scale    = scale if isinstance(scale, (int, float)) and not isinstance(scale, bool) else 1,
                rotate   = _int_or(params, "rotate", 0),
                rotate_x = _int_or(params, "rotateX", 0),
                rotate_y = _int_or(params, "rotateY", 0),
                rotate_z = _int_or(params, "rotateZ", 0),
            ),
        )
        self.store.dispatch(AddSlide(slide))
        return CommandResult.ok(
            f"Created new slide: {slide.id}",
            {"id": slide.id, "title": slide.title},
        )
    except Exception as exc:          # noqa: BLE001
        return CommandResult.fail(ERR_NEW_SLIDE, f"Failed to create slide: {exc}")


async def cmd_set_slide_title(self, params: Params) -> CommandResult:
    """set-slide-title text=… [slideIndex=0]"""
    try:
        text = _text(params)
        if text is None:
            return CommandResult.fail(ERR_TITLE_MISSING, "text parameter required")

        slides = self.slides()
        index = to_int(params.get("slideIndex", 0))
        if not _valid_index(index, slides):
            return CommandResult.fail(ERR_TITLE_INDEX, f"Invalid slide index: {params.get('slideIndex', index)}")

        self.store.dispatch(EditSlide(slides[index].id, "title", text))
        return CommandResult.ok(f"Set slide title to: {text}", {"index": index, "title": text})
    except Exception as exc:          # noqa: BLE001
        return CommandResult.fail(ERR_TITLE_FAILED, f"Failed to set slide title: {exc}")


async def cmd_add_text(self, params: Params) -> CommandResult:
    """add-text text=… [slideIndex=last] — appends a new line to the content."""
    try:
        text = _text(params)
        if text is None:
            return CommandResult.fail(ERR_TEXT_MISSING, "text parameter required")

        slides = self.slides()
        index = to_int(params.get("slideIndex", len(slides) - 1))
        if not _valid_index(index, slides):
            return CommandResult.fail(ERR_TEXT_INDEX, f"Invalid slide index: {params.get('slideIndex', index)}")

        current = slides[index].content
        content = f"{current}\n{text}" if current else text
        self.store.dispatch(EditSlide(slides[index].id, "content", content))
        return CommandResult.ok(f"Added text to slide {index}", {"slideIndex": index, "text": text})
    except Exception as exc:          # noqa: BLE001
        return CommandResult.fail(ERR_TEXT_FAILED, f"Failed to add text: {exc}")


async def cmd_delete_slide(self, params: Params) -> CommandResult:
    """delete-slide [number=0] — slide 0 (the overview) can never be deleted."""
    try:
        slides = self.slides()
        index = to_int(params.get("number", 0))

        if index == 0:
            return CommandResult.fail(ERR_DELETE_PROTECTED, "Cannot delete the overview slide (#0)")
        if not _valid_index(index, slides):
            return CommandResult.fail(ERR_DELETE_INDEX, f"Invalid slide number: {params.get('number', index)}")

        # The store only deletes the active slide
        self.store.dispatch(SetActiveSlide(slides[index].id))
        self.store.dispatch(DeleteActiveSlide())
        return CommandResult.ok(f"Deleted slide {index}", {"deletedIndex": index})
    except Exception as exc:          # noqa: BLE001
        return CommandResult.fail(ERR_DELETE_FAILED, f"Failed to delete slide: {exc}")


async def cmd_duplicate_slide(self, params: Params) -> CommandResult:
    """duplicate-slide number=… — appends a copy titled '<title> (copy)'."""
    try:
        if "number" not in params:
            return CommandResult.fail(ERR_DUPLICATE_MISSING, "number parameter required")

        slides = self.slides()
        index = to_int(params["number"])
        if not _valid_index(index, slides):
            return CommandResult.fail(ERR_DUPLICATE_INDEX, f"Invalid slide number: {params['number']}")

        source = slides[index]
        clone = replace(source, id=_new_slide_id(self, slides),
                        title=source.title + COPY_SUFFIX, active=False)
        self.store.dispatch(AddSlide(clone))
        return CommandResult.ok(f"Duplicated slide {index}", {"sourceIndex": index, "newId": clone.id})
    except Exception as exc:          # noqa: BLE001
        return CommandResult.fail(ERR_DUPLICATE_FAILED, f"Failed to duplicate slide: {exc}")


# ---------------------------------------------------------------------------
# Navigation (not recorded in history)
# ---------------------------------------------------------------------------

async def cmd_goto_slide(self, params: Params) -> CommandResult:
    """goto-slide number=… — marks the slide active."""
    try:
        if "number" not in params:
            return CommandResult.fail(ERR_GOTO_MISSING, "number parameter required")

        slides = self.slides()
        index = to_int(params["number"])
        if not _valid_index(index, slides):
            return CommandResult.fail(ERR_GOTO_INDEX, f"Invalid slide number: {params['number']}")

        target = slides[index]
        self.store.dispatch(SetActiveSlide(target.id))
        return CommandResult.ok(f"Went to slide {index}: {target.title}", {"index": index, "title": target.title})
    except Exception as exc:          # noqa: BLE001
        return CommandResult.fail(ERR_GOTO_FAILED, f"Failed to goto slide: {exc}")


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

async def cmd_list_slides(self, params: Params) -> CommandResult:
    try:
        slides = self.slides()
        summary: list[dict[str, Any]] = [
            {
                "index":         i,
                "id":            s.id,
                "title":         s.title,
                "contentLength": len(s.content),
                "position":      {"x": s.position.x, "y": s.position.y},
            }
            for i, s in enumerate(slides)
        ]
        return CommandResult.ok(f"Found {len(slides)} slides", summary)
    except Exception as exc:          # noqa: BLE001
        return CommandResult.fail(ERR_LIST_FAILED, f"Failed to list slides: {exc}")


async def cmd_get_current_slide(self, params: Params) -> CommandResult:
    """The active slide, or the first one when none is flagged."""
    try:
        slides = self.slides()
        if not slides:
            raise LookupError("the deck has no slides")
        index = next((i for i, s in enumerate(slides) if s.active), 0)
        slide = slides[index]
        return CommandResult.ok(
            f"Current slide: {slide.title}",
            {"index": index, "id": slide.id, "title": slide.title, "content": slide.content},
        )
    except Exception as exc:          # noqa: BLE001
        return CommandResult.fail(ERR_CURRENT_FAILED, f"Failed to get current slide: {exc}")


async def cmd_get_slides(self, params: Params) -> CommandResult:
    try:
        slides = self.slides()
        return CommandResult.ok(f"Retrieved {len(slides)} slides", [s.to_dict() for s in slides])
    except Exception as exc:          # noqa: BLE001
        return CommandResult.fail(ERR_GET_SLIDES_FAILED, f"Failed to get slides: {exc}")


async def cmd_get_slide_info(self, params: Params) -> CommandResult:
    """get-slide-info [number=0]"""
    try:
        slides = self.slides()
        index = to_int(params.get("number", 0))
        if not _valid_index(index, slides):
            return CommandResult.fail(ERR_INFO_INDEX, f"Invalid slide number: {params.get('number', 0)}")

        info = dict(slides[index].to_dict(), index=index)
        return CommandResult.ok(f"Slide {index} info", info)
    except Exception as exc:          # noqa: BLE001
        return CommandResult.fail(ERR_INFO_FAILED, f"Failed to get slide info: {exc}")
