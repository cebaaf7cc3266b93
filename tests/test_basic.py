"""Basic tests for noisefield."""

import numpy as np
import pytest


def test_generate_basic():
    from noisefield import generate
    img = generate(width=64, height=48)
    assert img.mode == "RGBA"
    assert img.size == (64, 48)


def test_generate_two_colour():
    from noisefield import generate
    img = generate(width=32, height=32, combinator="fbm",
                   colors=((0, 0, 0), (255, 255, 255)))
    arr = np.array(img)
    assert arr[:, :, :3].min() == 0
    assert arr[:, :, :3].max() == 255


def test_reproducibility():
    from noisefield import generate
    img1 = generate(width=48, height=32, seed=99)
    img2 = generate(width=48, height=32, seed=99)
    np.testing.assert_array_equal(np.array(img1), np.array(img2))


def test_different_seeds_differ():
    from noisefield import generate
    img1 = generate(width=48, height=32, seed=1)
    img2 = generate(width=48, height=32, seed=2)
    assert not np.array_equal(np.array(img1), np.array(img2))


def test_generate_rejects_zero_octaves():
    from noisefield import generate
    with pytest.raises(ValueError):
        generate(width=8, height=8, octaves=0)


def test_cli_writes_png(tmp_path, capsys):
    from PIL import Image
    from noisefield.__main__ import main

    out = tmp_path / "sub" / "noise.png"
    code = main(["--width", "24", "--height", "16", "--octaves", "2",
                 "--combinator", "fbm", "--seed", "3", "-o", str(out)])
    assert code == 0
    assert out.exists()
    assert "Saved noise (24x16)" in capsys.readouterr().out
    with Image.open(out) as img:
        assert img.size == (24, 16)


def test_cli_colors(tmp_path):
    from noisefield.__main__ import main
    out = tmp_path / "noise.png"
    code = main(["-W", "8", "-H", "8", "--colors", "0", "0", "0",
                 "255", "255", "255", "-o", str(out)])
    assert code == 0


def test_cli_rejects_bad_colour_count(tmp_path):
    from noisefield.__main__ import main
    with pytest.raises(SystemExit):
        main(["--colors", "1", "2", "3", "-o", str(tmp_path / "x.png")])


def test_cli_reports_invalid_parameters(tmp_path, capsys):
    from noisefield.__main__ import main
    code = main(["-W", "8", "-H", "8", "--octaves", "0",
                 "-o", str(tmp_path / "x.png")])
    assert code == 1
    assert "octaves" in capsys.readouterr().err


def test_cli_log_file(tmp_path):
    from noisefield.__main__ import main
    from noisefield.logging_config import setup_logging

    log = tmp_path / "noise.log"
    code = main(["-W", "8", "-H", "8", "--octaves", "4",
                 "-o", str(tmp_path / "x.png"), "--log-file", str(log)])
    # Replacing the handlers closes the file handler
    setup_logging()
    assert code == 0
    text = log.read_text(encoding="utf-8")
    assert "Frequency: 0.010000" in text
    assert "octaves: 4" in text


def test_setup_logging_replaces_handlers(tmp_path):
    import logging
    from noisefield.logging_config import setup_logging

    logger = setup_logging("debug", log_file=str(tmp_path / "a.log"))
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    file_handler = logger.handlers[1]

    logger = setup_logging(logging.WARNING)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
    assert file_handler.stream is None
    setup_logging()
