import base64
import io

import pytest
from kungfu import Error, Ok
from PIL import Image

from checkout_flow.signature import (
    NO_INK,
    TERMS_NOT_ACCEPTED,
    Point,
    SignaturePad,
    rasterize,
)


def inked(pad: SignaturePad) -> SignaturePad:
    pad.pen_down(10, 10)
    pad.pen_move(50, 40)
    pad.pen_up()
    return pad


@pytest.mark.parametrize(
    ("ink", "terms", "accepted"),
    [(False, False, False), (True, False, False), (False, True, False), (True, True, True)],
)
def test_confirm_needs_ink_and_terms(ink: bool, terms: bool, accepted: bool) -> None:
    pad = SignaturePad()
    if ink:
        inked(pad)
    result = pad.confirm(accepted_terms=terms)
    assert isinstance(result, Ok) is accepted
    assert pad.can_confirm is accepted


def test_rejection_messages() -> None:
    pad = SignaturePad()
    match pad.confirm(accepted_terms=True):
        case Error(e):
            assert e.message == NO_INK
        case Ok(_):
            pytest.fail("confirmed without ink")

    inked(pad)
    match pad.confirm(accepted_terms=False):
        case Error(e):
            assert e.message == TERMS_NOT_ACCEPTED
        case Ok(_):
            pytest.fail("confirmed without accepted terms")


def test_tap_without_movement_is_not_ink() -> None:
    pad = SignaturePad()
    pad.pen_down(5, 5)
    pad.pen_up()
    assert not pad.state.has_ink


def test_move_while_pen_up_is_ignored() -> None:
    pad = SignaturePad()
    assert not pad.pen_move(5, 5)
    assert not pad.state.has_ink


def test_touch_behaves_like_pointer() -> None:
    pad = SignaturePad()
    pad.touch_start(1, 1)
    pad.touch_move(9, 9)
    pad.touch_end()
    assert pad.state.has_ink
    assert pad.strokes == ((Point(1, 1), Point(9, 9)),)


def test_clear_resets_both_gates_and_image() -> None:
    pad = inked(SignaturePad())
    assert isinstance(pad.confirm(accepted_terms=True), Ok)
    pad.clear()
    assert not pad.state.has_ink
    assert not pad.state.accepted_terms
    assert pad.state.image is None
    assert pad.strokes == ()


def test_confirm_produces_png_of_canvas_size() -> None:
    pad = inked(SignaturePad(width=300, height=100))
    match pad.confirm(accepted_terms=True):
        case Ok(image):
            assert pad.state.image == image
            with Image.open(io.BytesIO(image.png)) as png:
                assert png.format == "PNG"
                assert png.size == (300, 100)
        case Error(e):
            pytest.fail(e.message)


def test_data_url() -> None:
    image = rasterize([(Point(0, 0), Point(10, 10))], 20, 20)
    prefix = "data:image/png;base64,"
    url = image.data_url()
    assert url.startswith(prefix)
    assert base64.b64decode(url[len(prefix):]) == image.png


def test_rasterize_draws_black_ink_on_white() -> None:
    image = rasterize([(Point(0, 10), Point(39, 10))], 40, 20)
    with Image.open(io.BytesIO(image.png)) as png:
        rgb = png.convert("RGB")
        assert rgb.getpixel((20, 10)) == (0, 0, 0)
        assert rgb.getpixel((20, 2)) == (255, 255, 255)
