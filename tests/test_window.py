import pytest

from fdfview.errors import ErrorCode, MlxError
from fdfview.window import Mlx, Setting, set_setting

WIDTH = 400
HEIGHT = 400
NAME = "MLX42"

DEFAULTS = {
    Setting.STRETCH_IMAGE: False,
    Setting.FULLSCREEN: False,
    Setting.MAXIMIZED: False,
    Setting.DECORATED: True,
    Setting.HEADLESS: False,
}


@pytest.fixture(autouse=True)
def restore_settings():
    yield
    for setting, value in DEFAULTS.items():
        set_setting(setting, value)


@pytest.fixture
def mlx():
    set_setting(Setting.HEADLESS, True)
    window = Mlx(WIDTH, HEIGHT, NAME, False)
    yield window
    if not window.terminated:
        window.terminate()


def test_basic(mlx):
    assert mlx.width == WIDTH
    assert mlx.height == HEIGHT
    assert mlx.events.title == NAME
    assert mlx.visible is False
    assert mlx.resizable is False
    assert mlx.events.should_close is False


def test_settings():
    set_setting(Setting.STRETCH_IMAGE, True)
    set_setting(Setting.MAXIMIZED, True)
    set_setting(Setting.DECORATED, True)
    set_setting(Setting.FULLSCREEN, True)
    set_setting(Setting.HEADLESS, True)
    window = Mlx(400, 400, "MLX42", False)
    assert window.settings[Setting.STRETCH_IMAGE]
    assert window.settings[Setting.FULLSCREEN]
    assert window.settings[Setting.MAXIMIZED]
    assert window.visible is False
    window.terminate()
    assert window.terminated is True


def test_settings_are_snapshotted_at_creation(mlx):
    set_setting(Setting.FULLSCREEN, True)
    assert not mlx.settings[Setting.FULLSCREEN]


def test_invalid_setting():
    with pytest.raises(ValueError):
        set_setting(99, 1)


def test_single_image(mlx):
    img = mlx.new_image(WIDTH // 2, HEIGHT // 2)
    assert img in mlx.images
    val = mlx.image_to_window(img, WIDTH // 4, HEIGHT // 4)
    assert val == 0
    assert img.instances[0].x == 100
    assert [call.image for call in mlx.render_order()] == [img]
    mlx.delete_image(img)
    assert mlx.images == []
    assert mlx.render_order() == []


def test_multiple_images(mlx):
    img1 = mlx.new_image(WIDTH // 2, HEIGHT // 2)
    img2 = mlx.new_image(WIDTH, HEIGHT)
    val1 = mlx.image_to_window(img1, WIDTH // 4, HEIGHT // 4)
    val2 = mlx.image_to_window(img2, 0, 0)
    assert val1 >= 0 and val2 >= 0
    assert [call.image for call in mlx.render_order()] == [img1, img2]
    mlx.delete_image(img1)
    assert mlx.images == [img2]
    mlx.delete_image(img2)
    assert mlx.images == []


def test_instances_get_increasing_depth(mlx):
    img = mlx.new_image(10, 10)
    assert mlx.image_to_window(img, 0, 0) == 0
    assert mlx.image_to_window(img, 5, 5) == 1
    assert [inst.z for inst in img.instances] == [0, 1]
    assert mlx.zdepth == 2


def test_set_instance_depth_reorders(mlx):
    a = mlx.new_image(10, 10)
    b = mlx.new_image(10, 10)
    mlx.image_to_window(a, 0, 0)
    mlx.image_to_window(b, 0, 0)
    mlx.set_instance_depth(a.instances[0], 5)
    assert [call.image for call in mlx.render_order()] == [b, a]


def test_disabled_instance_not_rendered(mlx):
    a = mlx.new_image(10, 10)
    b = mlx.new_image(10, 10)
    mlx.image_to_window(a, 0, 0)
    mlx.image_to_window(b, 0, 0)
    b.instances[0].enabled = False
    a.enabled = True
    assert [call.image for call in mlx.render_order()] == [a]


def test_new_image_invalid_dimensions(mlx):
    with pytest.raises(MlxError) as info:
        mlx.new_image(0, 10)
    assert info.value.code == ErrorCode.INVDIM


def test_string_torture(mlx):
    img = mlx.new_image(WIDTH // 2, HEIGHT // 2)
    img.pixels[:] = b"\xff" * len(img.pixels)
    assert mlx.image_to_window(img, WIDTH // 4, HEIGHT // 4) >= 0
    state = {"count": 0, "img": None}

    def draw(window):
        if state["img"] is not None:
            window.delete_image(state["img"])
        state["img"] = window.new_image(8 * len(str(state["count"])), 20)
        assert window.image_to_window(state["img"], 0, 0) == 0
        if state["count"] >= 420:
            window.close_window()
        state["count"] += 1

    assert mlx.loop_hook(draw, mlx) is True
    mlx.loop()
    assert state["count"] == 421
    assert mlx.frames == 421
    assert len(mlx.images) == 2
    assert mlx.projection[0] == pytest.approx(2.0 / WIDTH)
    mlx.delete_image(img)
    assert mlx.images == [state["img"]]


def test_close_stops_remaining_hooks(mlx):
    calls = []
    mlx.loop_hook(lambda w: (calls.append("first"), w.close_window()), mlx)
    mlx.loop_hook(lambda w: calls.append("second"), mlx)
    mlx.loop()
    assert calls == ["first"]
    assert mlx.frames == 1


def test_loop_hook_requires_callable(mlx):
    with pytest.raises(TypeError):
        mlx.loop_hook(42, None)


@pytest.mark.parametrize("width, height", [(0, 10), (10, -1)])
def test_invalid_window_size(width, height):
    with pytest.raises(ValueError):
        Mlx(width, height, "MLX42", False)


def test_terminate_clears_everything(mlx):
    img = mlx.new_image(10, 10)
    mlx.image_to_window(img, 0, 0)
    mlx.loop_hook(lambda p: None, None)
    mlx.terminate()
    assert mlx.images == [] and mlx.render_queue == [] and mlx.hooks == []
    with pytest.raises(RuntimeError):
        mlx.new_image(10, 10)