"""
Signature — freehand capture gated by ink + accepted terms.

    from checkout_flow import signature as Sig

    pad = Sig.SignaturePad()
    ...
    match pad.confirm(accepted_terms=True):
        case Ok(image): ...
        case Error(e): ...
"""

from __future__ import annotations

from checkout_flow.signature._types import Point, Stroke, SignatureImage, SignatureState
from checkout_flow.signature._raster import rasterize
from checkout_flow.signature._pad import SignaturePad, NO_INK, TERMS_NOT_ACCEPTED

__all__ = (
    "Point",
    "Stroke",
    "SignatureImage",
    "SignatureState",
    "rasterize",
    "SignaturePad",
    "NO_INK",
    "TERMS_NOT_ACCEPTED",
)
