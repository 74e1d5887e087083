import numpy as np
import pytest

from main import main, parse_args


def test_parse_args_defaults():
    args = parse_args([])

    assert (args.width, args.height, args.bounces) == (800, 600, 2)
    assert args.ambient == pytest.approx(0.15)
    assert args.light == [0.0, 0.0, 0.0]
    assert not args.serial and not args.reference
    assert args.output is None


def test_parse_args_camera():
    args = parse_args(["--rot", "0.1", "0.2", "0.3", "--trans", "1", "2", "-5", "--serial"])

    assert args.rot == [0.1, 0.2, 0.3]
    assert args.trans == [1.0, 2.0, -5.0]
    assert args.serial


def test_main_saves_image(tmp_path):
    output = tmp_path / "render.png"
    main(["--width", "16", "--height", "12", "--output", str(output)])

    assert output.exists()


def test_main_reference_saves_image(tmp_path):
    output = tmp_path / "render.png"
    main(["--reference", "--width", "8", "--height", "6", "--bounces", "1", "--output", str(output)])

    import matplotlib.pyplot as plt
    image = plt.imread(str(output))
    assert image.shape[:2] == (6, 8)
    assert np.any(image[..., :3] > 0)


@pytest.mark.parametrize("tracer", [[], ["--reference"]])
def test_main_light_on_surface(tmp_path, tracer):
    output = tmp_path / "render.png"
    main(tracer + ["--width", "8", "--height", "6", "--light", "0", "0", "2", "--output", str(output)])

    assert output.exists()
