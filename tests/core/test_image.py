import numpy as np
import pytest
from bmpcodec import consts
from bmpcodec.bmp.headers import BmpDibHeader, BmpHeader
from bmpcodec.core.image import Image, ImageIndex
from bmpcodec.core.pixel import Pixel


class TestPixel:
    def test_equality_is_structural(self):
        assert Pixel(1, 2, 3) == Pixel(1, 2, 3)
        assert Pixel(1, 2, 3) != Pixel(3, 2, 1)
        assert len({Pixel(1, 2, 3), Pixel(1, 2, 3)}) == 1

    def test_channels_are_truncated_to_a_byte(self):
        assert Pixel(256, 257, -1) == Pixel(0, 1, 255)

    def test_is_immutable(self):
        px = Pixel(1, 2, 3)
        with pytest.raises(AttributeError):
            px.r = 5  # type: ignore

    def test_formatting(self):
        px = Pixel(255, 10, 171)
        assert str(px) == "rgb(255, 10, 171)"
        assert f"{px:x}" == "ff0aab"
        assert f"{px:X}" == "FF0AAB"
        assert f"{px}" == "rgb(255, 10, 171)"

    def test_bgr_conversion(self):
        px = Pixel.from_bgr(b"\x01\x02\x03")
        assert px == Pixel(3, 2, 1)
        assert px.to_bgr() == b"\x01\x02\x03"

    def test_presets(self):
        assert consts.BLACK == Pixel(0, 0, 0)
        assert consts.WHITE == Pixel(255, 255, 255)
        assert consts.RED == Pixel(255, 0, 0)
        assert consts.LIME == Pixel(0, 255, 0)
        assert consts.BLUE == Pixel(0, 0, 255)


class TestImageIndex:
    def test_row_major_order(self):
        coords = Image.new(2, 3).coordinates()
        assert list(coords) == [
            (0, 0),
            (1, 0),
            (0, 1),
            (1, 1),
            (0, 2),
            (1, 2),
        ]

    def test_is_restartable(self):
        coords = ImageIndex(3, 1)
        assert list(coords) == list(coords)
        assert len(coords) == 3

    def test_empty(self):
        assert list(ImageIndex(0, 5)) == []
        assert list(ImageIndex(5, 0)) == []


class TestImage:
    def test_new_image(self):
        img = Image.new(5, 3)
        assert (img.get_width(), img.get_height()) == (5, 3)
        assert img.padding == 1
        assert img.color_palette is None
        assert len(img.data) == 15
        assert all(px == consts.BLACK for px in img.data)
        assert img.header == BmpHeader(54 + 3 * 16, 0, 0, 54)
        assert img.dib_header == BmpDibHeader.new(5, 3)

    def test_set_and_get_pixel(self):
        img = Image.new(2, 1)
        img.set_pixel(1, 0, consts.WHITE)
        img.set_pixel(0, 0, consts.WHITE)
        assert len(img.data) == 2
        assert img.get_pixel(0, 0) == consts.WHITE
        assert img.get_pixel(1, 0) == consts.WHITE

    def test_top_row_is_stored_last(self):
        img = Image.new(2, 2)
        img.set_pixel(1, 0, consts.RED)
        img.set_pixel(0, 1, consts.BLUE)
        assert img.data[3] == consts.RED
        assert img.data[0] == consts.BLUE

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (2, 0), (0, 2)])
    def test_out_of_range_coordinates(self, x, y):
        img = Image.new(2, 2)
        with pytest.raises(IndexError):
            img.get_pixel(x, y)
        with pytest.raises(IndexError):
            img.set_pixel(x, y, consts.RED)

    def test_invalid_sizes(self):
        with pytest.raises(ValueError):
            Image.new(-1, 2)
        with pytest.raises(ValueError):
            Image(2, 2, data=[consts.RED])

    def test_equality(self):
        a = Image.new(2, 2)
        b = Image.new(2, 2)
        assert a == b
        b.set_pixel(0, 0, consts.RED)
        assert a != b
        assert a != "not an image"

    def test_repr(self):
        assert repr(Image.new(3, 4)) == (
            "Image(width=3, height=4, padding=3, palette=None)"
        )


class TestImageArrays:
    def test_to_array_is_top_row_first(self):
        img = Image.new(2, 2)
        img.set_pixel(0, 0, consts.RED)
        img.set_pixel(1, 1, consts.BLUE)
        arr = img.to_array()
        assert arr.shape == (2, 2, 3)
        assert arr.dtype == np.uint8
        assert tuple(arr[0, 0]) == (255, 0, 0)
        assert tuple(arr[1, 1]) == (0, 0, 255)
        assert tuple(arr[0, 1]) == (0, 0, 0)

    def test_from_array(self):
        arr = np.zeros((3, 2, 3), dtype=np.uint8)
        arr[0, 1] = (10, 20, 30)
        arr[2, 0] = (1, 2, 3)
        img = Image.from_array(arr)
        assert (img.width, img.height) == (2, 3)
        assert img.get_pixel(1, 0) == Pixel(10, 20, 30)
        assert img.get_pixel(0, 2) == Pixel(1, 2, 3)
        assert np.array_equal(img.to_array(), arr)

    def test_from_array_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            Image.from_array(np.zeros((4, 4), dtype=np.uint8))
        with pytest.raises(ValueError):
            Image.from_array(np.zeros((4, 4, 4), dtype=np.uint8))

    def test_empty_image_array(self):
        assert Image.new(0, 0).to_array().shape == (0, 0, 3)
