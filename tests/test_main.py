"""Tests for the command-line runner."""

from types import SimpleNamespace

import pytest
from PIL import Image

import main as main_module
from main import main, parse_args
from rendering import OUTLINE_COLOR
from tests.conftest import BLUE, RED


@pytest.fixture
def picture_path(tmp_path):
    image = Image.new("RGB", (8, 8), BLUE)
    for x in range(4):
        for y in range(4, 8):
            image.putpixel((x, y), RED)

    path = tmp_path / "picture.bmp"
    image.save(path)
    return path


class TestParseArgs:
    def test_defaults(self, picture_path):
        args = parse_args([str(picture_path)])
        assert args.output is None
        assert args.scale == 1
        assert not args.fill
        assert not args.show

    def test_scale_must_be_positive(self, picture_path):
        with pytest.raises(SystemExit):
            parse_args([str(picture_path), "--scale", "0"])


class TestMain:
    def test_writes_default_output(self, picture_path):
        assert main([str(picture_path)]) == 0

        output = picture_path.with_name("picture_quadtree.png")
        with Image.open(output) as drawing:
            assert drawing.size == (8, 8)
            assert drawing.getpixel((0, 0)) == OUTLINE_COLOR
            assert drawing.getpixel((5, 5)) == tuple(BLUE)

    def test_fill_and_scale(self, picture_path, tmp_path):
        output = tmp_path / "filled.png"
        status = main([str(picture_path), "-o", str(output),
                       "--fill", "--no-outlines", "--scale", "2"])
        assert status == 0

        with Image.open(output) as drawing:
            assert drawing.size == (16, 16)
            assert drawing.getpixel((2, 14)) == tuple(RED)
            assert drawing.getpixel((14, 2)) == tuple(BLUE)

    def test_rejects_bad_dimension(self, tmp_path):
        path = tmp_path / "six.bmp"
        Image.new("RGB", (6, 6)).save(path)
        assert main([str(path)]) == 1

    def test_missing_input(self, tmp_path):
        assert main([str(tmp_path / "missing.bmp")]) == 1


class TestRunnerErrors:
    def test_logger_named_after_module(self):
        assert main_module.logger.name == main_module.__name__

    def test_fill_does_not_reopen_input(self, picture_path, tmp_path, monkeypatch):
        def fail_open(*args, **kwargs):
            raise AssertionError("the source picture is not drawn with --fill")

        monkeypatch.setattr(main_module, "Image", SimpleNamespace(open=fail_open))
        assert main([str(picture_path), "-o", str(tmp_path / "out.png"), "--fill"]) == 0

    def test_unwritable_output(self, picture_path, tmp_path):
        output = tmp_path / "missing" / "out.png"
        assert main([str(picture_path), "-o", str(output)]) == 1

    def test_unknown_output_extension(self, picture_path, tmp_path):
        assert main([str(picture_path), "-o", str(tmp_path / "out.unknown")]) == 1
