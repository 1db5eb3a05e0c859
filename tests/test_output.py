from pathlib import Path

import numpy as np
import PIL.Image
import pytest

from escapetime.ascii_art import HEIGHT, WIDTH, compose_ascii, format_ascii
from escapetime.output import image_format_for, write_ascii, write_image
from escapetime.renderer import compose


@pytest.mark.parametrize(
    "name, expected",
    [
        ("set.png", "PNG"),
        ("set.PNG", "PNG"),
        ("set.jpg", "JPEG"),
        ("set.tif", "TIFF"),
        ("set.bmp", "BMP"),
        ("set", "PNG"),
    ],
)
def test_image_format_for(name, expected):
    assert image_format_for(Path(name)) == expected


def test_image_format_rejects_unknown_extension():
    with pytest.raises(ValueError, match="Unsupported image format"):
        image_format_for(Path("set.nope"))


def test_write_image_png(tmp_path):
    buffer = compose(40, 24, 60)
    path = write_image(buffer, tmp_path / "nested" / "set.png")
    assert path.is_file()
    with PIL.Image.open(path) as image:
        assert image.format == "PNG"
        assert image.size == (40, 24)
        assert np.array_equal(np.asarray(image.convert("RGB")), buffer)


def test_write_image_unknown_format_creates_nothing(tmp_path):
    buffer = compose(4, 4, 10)
    with pytest.raises(ValueError):
        write_image(buffer, tmp_path / "sub" / "set.nope")
    assert not (tmp_path / "sub").exists()


def test_write_image_into_file_path_fails(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", "utf-8")
    with pytest.raises(OSError):
        write_image(compose(4, 4, 10), blocker / "set.png")


def test_write_ascii(tmp_path):
    grid = compose_ascii()
    path = write_ascii(grid, tmp_path / "out" / "set.txt")
    text = path.read_text("utf-8")
    assert text == format_ascii(grid)
    lines = text.splitlines()
    assert len(lines) == HEIGHT
    assert all(len(line) == WIDTH for line in lines)
