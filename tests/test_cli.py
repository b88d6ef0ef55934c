"""Tests for the command-line interface."""

from click.testing import CliRunner

from line_morph import __version__
from line_morph.cli.main import LinePairType, cli

PAIR = "1,1,8,1:1,2,6,2"


def test_line_pair_type_parses_coordinates():
    assert LinePairType().convert(PAIR, None, None) == (
        (1.0, 1.0), (8.0, 1.0), (1.0, 2.0), (6.0, 2.0)
    )


def test_morph_command(image_files, tmp_path):
    source_path, dest_path = image_files
    output = tmp_path / "out"

    result = CliRunner().invoke(cli, [
        'morph', str(source_path), str(dest_path),
        '-l', PAIR, '-n', '2', '-o', str(output), '-q', '-w', '1',
    ])

    assert result.exit_code == 0, result.output
    assert len(list(output.glob("*/source_dest/png/frame_*.png"))) == 3


def test_explicit_ratios(image_files, tmp_path):
    source_path, dest_path = image_files
    output = tmp_path / "out"

    result = CliRunner().invoke(cli, [
        'morph', str(source_path), str(dest_path),
        '-l', PAIR, '-r', '0', '-r', '1', '-o', str(output), '-q', '-w', '1',
    ])

    assert result.exit_code == 0, result.output
    assert len(list(output.glob("*/source_dest/png/frame_*.png"))) == 2


def test_malformed_pair_is_a_usage_error(image_files):
    source_path, dest_path = image_files

    for bad in ("1,2,3", "1,2,3:4,5,6", "a,b,c,d:1,2,3,4"):
        result = CliRunner().invoke(cli, ['morph', str(source_path), str(dest_path), '-l', bad])
        assert result.exit_code == 2


def test_out_of_range_ratio_exits_with_error(image_files, tmp_path):
    source_path, dest_path = image_files

    result = CliRunner().invoke(cli, [
        'morph', str(source_path), str(dest_path),
        '-l', PAIR, '-r', '1.5', '-o', str(tmp_path), '-q',
    ])

    assert result.exit_code == 1


def test_version():
    result = CliRunner().invoke(cli, ['--version'])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_pipeline_lines_print_once(image_files, tmp_path):
    source_path, dest_path = image_files

    result = CliRunner().invoke(cli, [
        'morph', str(source_path), str(dest_path),
        '-l', PAIR, '-n', '1', '-o', str(tmp_path), '-w', '1',
    ])

    assert result.exit_code == 0, result.output
    assert result.output.count("STEP 1: Loading images...") == 1
    assert "resizing destination" in result.output
    assert "Success!" in result.output
