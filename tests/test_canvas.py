import pytest

from fdfview.canvas import (
    BPP,
    MAX_DIMENSION,
    DrawCall,
    Image,
    Instance,
    Texture,
    image_from_texture,
    sort_render_queue,
)
from fdfview.errors import ErrorCode, MlxError


def test_new_image_is_zeroed_and_sized():
    image = Image(3, 2)
    assert len(image.pixels) == 3 * 2 * BPP
    assert all(byte == 0 for byte in image.pixels)
    assert image.enabled is True
    assert image.count == 0


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (MAX_DIMENSION + 1, 1), (-1, 4)])
def test_invalid_dimensions_raise(width, height):
    with pytest.raises(MlxError) as info:
        Image(width, height)
    assert info.value.code == ErrorCode.INVDIM


def test_largest_dimension_allowed():
    image = Image(MAX_DIMENSION, 1)
    assert image.width == MAX_DIMENSION


def test_put_and_get_pixel_round_trip():
    image = Image(4, 4)
    image.put_pixel(2, 3, 0x11223344)
    assert image.get_pixel(2, 3) == 0x11223344
    assert image.get_pixel(0, 0) == 0


def test_put_pixel_byte_order_is_red_first():
    image = Image(2, 1)
    image.put_pixel(1, 0, 0xAABBCCDD)
    assert bytes(image.pixels[4:8]) == bytes([0xAA, 0xBB, 0xCC, 0xDD])
    assert bytes(image.pixels[0:4]) == bytes(4)


@pytest.mark.parametrize("x,y", [(4, 0), (0, 4), (-1, 0), (0, -1)])
def test_pixel_out_of_bounds(x, y):
    image = Image(4, 4)
    with pytest.raises(MlxError) as info:
        image.put_pixel(x, y, 1)
    assert info.value.code == ErrorCode.INVPOS
    with pytest.raises(MlxError):
        image.get_pixel(x, y)


def test_resize_up_duplicates_pixels():
    image = Image(2, 2)
    colors = {(0, 0): 1, (1, 0): 2, (0, 1): 3, (1, 1): 4}
    for (x, y), color in colors.items():
        image.put_pixel(x, y, color)
    image.resize(4, 4)
    assert (image.width, image.height) == (4, 4)
    assert len(image.pixels) == 4 * 4 * BPP
    for y in range(4):
        for x in range(4):
            assert image.get_pixel(x, y) == colors[(x // 2, y // 2)]


def test_resize_down_samples():
    image = Image(4, 4)
    for y in range(4):
        for x in range(4):
            image.put_pixel(x, y, y * 4 + x + 1)
    image.resize(2, 2)
    assert image.get_pixel(0, 0) == 1
    assert image.get_pixel(1, 0) == 3
    assert image.get_pixel(0, 1) == 9
    assert image.get_pixel(1, 1) == 11


def test_resize_same_size_keeps_pixels():
    image = Image(3, 3)
    image.put_pixel(1, 1, 0xDEADBEEF)
    before = bytes(image.pixels)
    image.resize(3, 3)
    assert bytes(image.pixels) == before


def test_resize_invalid_dimensions():
    image = Image(3, 3)
    with pytest.raises(MlxError) as info:
        image.resize(0, 3)
    assert info.value.code == ErrorCode.INVDIM
    assert (image.width, image.height) == (3, 3)


def test_image_from_texture_copies_pixels():
    data = bytes(range(2 * 3 * BPP))
    texture = Texture(2, 3, data)
    image = image_from_texture(texture)
    assert (image.width, image.height) == (2, 3)
    assert bytes(image.pixels) == data


def test_texture_too_small_is_rejected():
    with pytest.raises(ValueError):
        Texture(2, 2, bytes(3))


def test_image_from_empty_texture_fails():
    with pytest.raises(MlxError) as info:
        image_from_texture(Texture(0, 0, b""))
    assert info.value.code == ErrorCode.INVDIM


def test_draw_call_refers_to_instance():
    image = Image(1, 1)
    image.instances.append(Instance(5, 6, 7))
    call = DrawCall(image, 0)
    assert call.instance.x == 5
    assert call.z == 7


def _call(z):
    image = Image(1, 1)
    image.instances.append(Instance(0, 0, z))
    return DrawCall(image, 0)


def test_sort_render_queue_orders_by_depth():
    calls = [_call(z) for z in (3, 1, 2, 0)]
    ordered = sort_render_queue(calls)
    assert [call.z for call in ordered] == [0, 1, 2, 3]
    assert len(calls) == 4


def test_sort_render_queue_equal_depth_later_first():
    first, middle, second = _call(1), _call(0), _call(1)
    ordered = sort_render_queue([first, middle, second])
    assert ordered == [middle, second, first]


def test_sort_render_queue_empty():
    assert sort_render_queue([]) == []