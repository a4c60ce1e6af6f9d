import numpy as np
import pytest
from PIL import Image
from extract_palette import main, parse_cli_args

def _write_png(path, rgba):
    Image.fromarray(rgba).save(path)

def _sample_image():
    img = np.zeros((20, 30, 4), dtype=np.uint8)
    img[:, :10] = (200, 30, 30, 255)
    img[:, 10:20] = (30, 200, 30, 255)
    img[:, 20:] = (30, 30, 200, 255)
    img[:2, :] = (255, 255, 255, 0)  # hidden rows
    return img

def test_parse_defaults(tmp_path):
    args = parse_cli_args([str(tmp_path)])
    assert args.colours == 8 and args.height is None
    assert not args.swatch and not args.remap and not args.debug

def test_single_image_swatch_and_remap(tmp_path, capsys):
    src = tmp_path / "sample.png"
    _write_png(src, _sample_image())
    outdir = tmp_path / "out"
    assert main([str(src), "--colours", "4", "--swatch", "--remap", "--outdir", str(outdir)]) == 0

    out = capsys.readouterr().out
    assert "Palette (3 colours):" in out
    assert "#cc1c1c" in out  # bucket centre of (200, 30, 30)

    swatch = np.array(Image.open(outdir / "sample_palette.png"))
    assert swatch.shape == (48, 48 * 3, 3)

    remapped = np.array(Image.open(outdir / "sample_mmcq.png"))
    assert remapped.shape == (20, 30, 4)
    assert tuple(remapped[5, 5]) == (204, 28, 28, 255)
    assert remapped[0, 0, 3] == 0

def test_folder_reports_bad_files_and_continues(tmp_path, capsys):
    _write_png(tmp_path / "a.png", _sample_image())
    (tmp_path / "b.png").write_bytes(b"not an image")
    assert main([str(tmp_path)]) == 1
    captured = capsys.readouterr()
    assert "=== a.png ===" in captured.out
    assert "[error] b.png" in captured.err

def test_invisible_image_is_skipped(tmp_path, capsys):
    src = tmp_path / "blank.png"
    _write_png(src, np.zeros((4, 4, 4), dtype=np.uint8))
    assert main([str(src)]) == 0
    assert "no visible pixels" in capsys.readouterr().out

def test_missing_source(tmp_path, capsys):
    assert main([str(tmp_path / "nope.png")]) == 2
    assert "not found" in capsys.readouterr().err

@pytest.mark.parametrize("colours", ["1", "257"])
def test_out_of_range_colours_rejected(tmp_path, capsys, colours):
    src = tmp_path / "sample.png"
    _write_png(src, _sample_image())
    with pytest.raises(SystemExit) as exc:
        main([str(src), "--colours", colours])
    assert exc.value.code == 2
    assert "--colours must be in [2, 256]" in capsys.readouterr().err

@pytest.mark.parametrize("height", ["0", "-5"])
def test_non_positive_height_rejected(tmp_path, capsys, height):
    src = tmp_path / "sample.png"
    _write_png(src, _sample_image())
    with pytest.raises(SystemExit) as exc:
        main([str(src), "--height", height])
    assert exc.value.code == 2
    assert "--height must be >= 1" in capsys.readouterr().err

def test_height_cap_shown_and_applied(tmp_path, capsys):
    src = tmp_path / "sample.png"
    _write_png(src, _sample_image())
    assert main([str(src), "--height", "10", "--debug"]) == 0
    out = capsys.readouterr().out
    assert "Height cap: 10" in out
    assert "Size: 15x10" in out

def test_no_height_cap_shown_as_dash(tmp_path, capsys):
    src = tmp_path / "sample.png"
    _write_png(src, _sample_image())
    assert main([str(src)]) == 0
    assert "Height cap: -" in capsys.readouterr().out
