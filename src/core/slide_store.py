"""In-memory slide deck store.

The command handler talks to the deck only through ``get_state()`` and
``dispatch(action)``; any object with those two methods can replace
SlideStore (e.g. a bridge to a live editor).

Slides and their positions are frozen dataclasses, so a tuple of slides
is already an independent snapshot: edits replace records, they never
mutate them in place.

Actions
-------
AddSlide(slide)                   — append a slide
EditSlide(slide_id, name, value)  — set ``title`` or ``content`` of one slide
SetActiveSlide(slide_id)          — flag exactly one slide as active
DeleteActiveSlide()               — remove the active slide
ImportSlides(slides)              — replace the whole slide list
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Union


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Transform:
    """Position / transform attributes of one slide."""
    x:        int = 0
    y:        int = 0
    z:        int = 0
    scale:    float = 1
    rotate:   int = 0
    rotate_x: int = 0
    rotate_y: int = 0
    rotate_z: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": self.x, "y": self.y, "z": self.z,
            "scale": self.scale, "rotate": self.rotate,
            "rotateX": self.rotate_x, "rotateY": self.rotate_y, "rotateZ": self.rotate_z,
        }


@dataclass(frozen=True)
class Slide:
    id:       str
    title:    str = ""
    content:  str = ""
    position: Transform = field(default_factory=Transform)
    active:   bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id":       self.id,
            "title":    self.title,
            "content":  self.content,
            "position": self.position.to_dict(),
            "active":   self.active,
        }


@dataclass
class DeckState:
    slides: list[Slide] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AddSlide:
    slide: Slide


@dataclass(frozen=True)
class EditSlide:
    slide_id: str
    name:     str       # "title" or "content"
    value:    str


@dataclass(frozen=True)
class SetActiveSlide:
    slide_id: str


@dataclass(frozen=True)
class DeleteActiveSlide:
    pass


@dataclass(frozen=True)
class ImportSlides:
    slides: tuple[Slide, ...]


Action = Union[AddSlide, EditSlide, SetActiveSlide, DeleteActiveSlide, ImportSlides]

_EDITABLE_FIELDS = frozenset({"title", "content"})


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class SlideStore:
    """Ordered, mutable collection of slides with change notification."""

    def __init__(self, slides: list[Slide] | tuple[Slide, ...] = ()) -> None:
        self._slides: list[Slide] = list(slides)
        self._listeners: list[Callable[[], None]] = []

    # ------------------------------------------------------------------
    def get_state(self) -> DeckState:
        return DeckState(slides=list(self._slides))

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Call ``listener()`` after every dispatched action.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def dispatch(self, action: Action) -> None:
        if   isinstance(action, AddSlide):          self._add(action)
        elif isinstance(action, EditSlide):         self._edit(action)
        elif isinstance(action, SetActiveSlide):    self._set_active(action)
        elif isinstance(action, DeleteActiveSlide): self._delete_active()
        elif isinstance(action, ImportSlides):      self._slides = list(action.slides)
        else:
            raise TypeError(f"Unknown action: {action!r}")
        for listener in list(self._listeners):
            listener()

    # ------------------------------------------------------------------
    # Reducers
    # ------------------------------------------------------------------

    def _index_of(self, slide_id: str) -> int:
        for i, slide in enumerate(self._slides):
            if slide.id == slide_id:
                return i
        raise KeyError(f"No slide with id {slide_id!r}")

    def _add(self, action: AddSlide) -> None:
        self._slides.append(action.slide)

    def _edit(self, action: EditSlide) -> None:
        if action.name not in _EDITABLE_FIELDS:
            raise ValueError(f"Slide field {action.name!r} is not editable")
        i = self._index_of(action.slide_id)
        self._slides[i] = replace(self._slides[i], **{action.name: action.value})

    def _set_active(self, action: SetActiveSlide) -> None:
        self._index_of(action.slide_id)             # raises for unknown ids
        self._slides = [
            s if s.active == (s.id == action.slide_id) else replace(s, active=not s.active)
            for s in self._slides
        ]

    def _delete_active(self) -> None:
        for i, slide in enumerate(self._slides):
            if slide.active:
                break
        else:
            raise LookupError("No active slide to delete")
        del self._slides[i]
        if self._slides:
            j = max(i - 1, 0)
            self._slides[j] = replace(self._slides[j], active=True)
