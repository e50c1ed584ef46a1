import pytest
from PIL import Image

from pixel_studio.__main__ import build_parser, main
from pixel_studio.color import RGB
from pixel_studio.infrastructure.storage import decode


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "in.png"
    Image.new("RGB", (3, 2), color=(230, 100, 94)).save(path)
    return path


def test_list_prints_catalog(capsys):
    assert main(["list"]) == 0

    out = capsys.readouterr().out
    assert "sepia" in out
    assert "vignette" in out


def test_apply_chain_writes_output(tmp_path, source):
    out = tmp_path / "out.png"

    assert main(["apply", str(source), str(out), "invert", "rotate"]) == 0

    result = decode(out)
    assert result.size == (2, 3)
    assert result.get_pixel(0, 0) == RGB(25, 155, 161)


def test_apply_with_value(tmp_path, source):
    out = tmp_path / "out.png"

    assert main(["apply", str(source), str(out), "lightness", "--value", "0"]) == 0
    assert set(decode(out).pixels()) == {RGB(0, 0, 0)}


def test_apply_vignette_with_overlay_paths(tmp_path, source, overlay_files):
    halo, grain = overlay_files
    out = tmp_path / "out.png"

    code = main(
        ["apply", str(source), str(out), "vignette", "--halo", str(halo), "--grain", str(grain)]
    )

    assert code == 0
    assert decode(out).get_pixel(2, 1) == RGB(169, 80, 54)


def test_apply_vignette_without_fit_fails(tmp_path, source, overlay_files, capsys):
    halo, grain = overlay_files
    out = tmp_path / "out.png"

    code = main(
        [
            "apply",
            str(source),
            str(out),
            "vignette",
            "--halo",
            str(halo),
            "--grain",
            str(grain),
            "--no-fit",
        ]
    )

    assert code == 1
    assert "overlay" in capsys.readouterr().err
    assert not out.exists()


@pytest.mark.parametrize(
    "args",
    [
        ["apply", "missing.png", "out.png", "invert"],
        ["apply", "{source}", "out.png", "blur"],
        ["apply", "{source}", "out.png", "hue"],
    ],
)
def test_apply_errors_exit_non_zero(tmp_path, source, args, capsys):
    argv = [arg.format(source=source) for arg in args]
    argv[2] = str(tmp_path / argv[2])

    assert main(argv) == 1
    assert capsys.readouterr().err.startswith("pixel-studio:")


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_apply_rejects_non_finite_value(tmp_path, source, capsys):
    out = tmp_path / "out.png"

    assert main(["apply", str(source), str(out), "hue", "--value", "inf"]) == 1
    assert "finite" in capsys.readouterr().err
    assert not out.exists()
