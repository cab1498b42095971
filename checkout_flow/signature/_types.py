"""
Signature types.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


type Stroke = tuple[Point, ...]
"""Points from pointer-down to pointer-up, joined segment by segment."""


@dataclass(frozen=True, slots=True)
class SignatureImage:
    """Rasterised signature. Attached verbatim to the order commit."""

    png: bytes
    width: int
    height: int

    def data_url(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.png).decode("ascii")


@dataclass(slots=True)
class SignatureState:
    has_ink: bool = False
    accepted_terms: bool = False
    image: SignatureImage | None = None


__all__ = ("Point", "Stroke", "SignatureImage", "SignatureState")
