"""
SignaturePad — freehand capture with a two-gate confirm.

    pad = SignaturePad(width=600, height=200)
    pad.pen_down(10, 10)
    pad.pen_move(40, 25)     # first segment → has_ink
    pad.pen_up()
    result = pad.confirm(accepted_terms=True)

Gates:
    has_ink         set by the first drawn segment, reset only by clear()
    accepted_terms  owned by the caller's checkbox; passed to confirm()
"""

from __future__ import annotations

import structlog
from kungfu import Result, Ok, Error

from checkout_flow.errors import ValidationError
from checkout_flow.signature._types import Point, Stroke, SignatureImage, SignatureState
from checkout_flow.signature._raster import rasterize

log = structlog.get_logger(__name__)

NO_INK = "Please draw your signature"
TERMS_NOT_ACCEPTED = "Please accept the terms to continue"


class SignaturePad:
    __slots__ = ("width", "height", "state", "_strokes", "_current")

    def __init__(self, width: int = 600, height: int = 200) -> None:
        self.width = width
        self.height = height
        self.state = SignatureState()
        self._strokes: list[Stroke] = []
        self._current: list[Point] | None = None

    # ── pointer / touch input ────────────────────────────────────────────────

    @property
    def drawing(self) -> bool:
        return self._current is not None

    def pen_down(self, x: float, y: float) -> None:
        self._finish_stroke()
        self._current = [Point(x, y)]

    def pen_move(self, x: float, y: float) -> bool:
        """Extend the open stroke. Ignored while the pen is up."""
        if self._current is None:
            return False
        self._current.append(Point(x, y))
        if not self.state.has_ink:
            self.state.has_ink = True
            log.debug("signature_ink_started")
        return True

    def pen_up(self) -> None:
        self._finish_stroke()

    # Touch events behave exactly like the pointer.
    touch_start = pen_down
    touch_move = pen_move
    touch_end = pen_up

    def _finish_stroke(self) -> None:
        if self._current is not None:
            self._strokes.append(tuple(self._current))
            self._current = None

    @property
    def strokes(self) -> tuple[Stroke, ...]:
        if self._current is not None:
            return (*self._strokes, tuple(self._current))
        return tuple(self._strokes)

    # ── gates ────────────────────────────────────────────────────────────────

    def set_terms_accepted(self, accepted: bool) -> None:
        self.state.accepted_terms = accepted

    @property
    def can_confirm(self) -> bool:
        return self.state.has_ink and self.state.accepted_terms

    def clear(self) -> None:
        self._strokes.clear()
        self._current = None
        self.state = SignatureState()
        log.debug("signature_cleared")

    def confirm(self, accepted_terms: bool | None = None) -> Result[SignatureImage, ValidationError]:
        """
        Rasterise the ink once both gates hold.

        Checked again here even if the UI kept the button disabled.
        """
        if accepted_terms is not None:
            self.state.accepted_terms = accepted_terms

        if not self.state.has_ink:
            return Error(ValidationError(NO_INK))
        if not self.state.accepted_terms:
            return Error(ValidationError(TERMS_NOT_ACCEPTED))

        image = rasterize(self.strokes, self.width, self.height)
        self.state.image = image
        log.info("signature_captured", strokes=len(self.strokes), png_bytes=len(image.png))
        return Ok(image)


__all__ = ("SignaturePad", "NO_INK", "TERMS_NOT_ACCEPTED")
