"""End-to-end tests of the command line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from planeclip import __version__
from planeclip.cli.app import app

runner = CliRunner()


def write_polygon(path: Path, shell, holes=()) -> Path:
    path.write_text(
        json.dumps({"type": "Polygon", "coordinates": [shell, *holes]}),
        encoding="utf-8",
    )
    return path


def square(x0, y0, x1, y1):
    return [[x0, y0], [x1, y0], [x1, y1], [x0, y1], [x0, y0]]


@pytest.fixture
def squares(tmp_path):
    """Two overlapping unit squares in separate files."""
    first = write_polygon(tmp_path / "first.geojson", square(0, 0, 1, 1))
    second = write_polygon(tmp_path / "second.geojson", square(0.5, 0.5, 1.5, 1.5))
    return first, second


class TestVersion:
    """Tests for the version option."""

    def test_version(self):
        """Test --version prints the version and exits cleanly."""
        result = runner.invoke(app, ["check", "--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestIntersectionsCommand:
    """Tests for `planeclip intersections`."""

    def test_writes_points(self, tmp_path):
        """Test intersections are written next to the input."""
        data = {
            "type": "MultiLineString",
            "coordinates": [[[0, 0], [2, 2]], [[0, 2], [2, 0]]],
        }
        source = tmp_path / "lines.geojson"
        source.write_text(json.dumps(data), encoding="utf-8")

        result = runner.invoke(app, ["intersections", str(source), "-q"])
        assert result.exit_code == 0, result.output

        output = tmp_path / "lines-intersections.geojson"
        features = json.loads(output.read_text(encoding="utf-8"))["features"]
        assert len(features) == 1
        assert features[0]["geometry"]["coordinates"] == [1.0, 1.0]
        assert features[0]["properties"]["edges"] == [0, 2]

    def test_no_write(self, tmp_path):
        """Test --no-write prints without creating a file."""
        source = write_polygon(tmp_path / "p.geojson", square(0, 0, 1, 1))
        result = runner.invoke(app, ["intersections", str(source), "--no-write"])
        assert result.exit_code == 0, result.output
        assert not (tmp_path / "p-intersections.geojson").exists()

    def test_custom_output(self, tmp_path):
        """Test --output chooses the destination."""
        source = write_polygon(tmp_path / "p.geojson", square(0, 0, 1, 1))
        destination = tmp_path / "points.geojson"
        result = runner.invoke(app, ["intersections", str(source), "-o", str(destination), "-q"])
        assert result.exit_code == 0, result.output
        assert json.loads(destination.read_text(encoding="utf-8"))["features"] == []

    def test_missing_file(self, tmp_path):
        """Test a missing input exits with an error."""
        result = runner.invoke(app, ["intersections", str(tmp_path / "absent.geojson")])
        assert result.exit_code == 1

    def test_invalid_json(self, tmp_path):
        """Test unreadable input exits with an error."""
        source = tmp_path / "broken.geojson"
        source.write_text("{", encoding="utf-8")
        result = runner.invoke(app, ["intersections", str(source), "-q"])
        assert result.exit_code == 1


class TestCheckCommand:
    """Tests for `planeclip check`."""

    def test_simple_rings(self, tmp_path):
        """Test simple rings pass."""
        source = write_polygon(
            tmp_path / "p.geojson",
            square(0, 0, 10, 10),
            [[[2, 2], [2, 4], [4, 4], [4, 2], [2, 2]]],
        )
        result = runner.invoke(app, ["check", str(source)])
        assert result.exit_code == 0, result.output

    def test_self_intersecting_ring(self, tmp_path):
        """Test a self-crossing ring exits with code 2."""
        source = write_polygon(tmp_path / "bow.geojson", [[0, 0], [2, 2], [2, 0], [0, 2], [0, 0]])
        result = runner.invoke(app, ["check", str(source), "-q"])
        assert result.exit_code == 2


class TestClipCommand:
    """Tests for `planeclip clip`."""

    def test_clip_writes_all_kinds(self, squares):
        """Test clips of every kind are written."""
        first, second = squares
        result = runner.invoke(app, ["clip", str(first), str(second), "-q"])
        assert result.exit_code == 0, result.output

        output = first.parent / "first-clips.geojson"
        features = json.loads(output.read_text(encoding="utf-8"))["features"]
        kinds = [f["properties"]["kind"] for f in features]
        assert kinds == ["internal", "external_a", "external_b"]
        assert features[0]["properties"]["area"] == pytest.approx(0.25)

    @pytest.mark.parametrize("algorithm", ["greiner-hormann", "weiler-atherton"])
    def test_algorithms(self, squares, tmp_path, algorithm):
        """Test both engines are selectable."""
        first, second = squares
        destination = tmp_path / f"{algorithm}.geojson"
        result = runner.invoke(
            app,
            ["clip", str(first), str(second), "-a", algorithm, "-o", str(destination), "-q"],
        )
        assert result.exit_code == 0, result.output
        features = json.loads(destination.read_text(encoding="utf-8"))["features"]
        assert sum(f["properties"]["area"] for f in features) == pytest.approx(1.75)

    def test_no_external(self, squares):
        """Test --no-external writes only internal clips."""
        first, second = squares
        result = runner.invoke(app, ["clip", str(first), str(second), "--no-external", "-q"])
        assert result.exit_code == 0, result.output
        features = json.loads((first.parent / "first-clips.geojson").read_text(encoding="utf-8"))["features"]
        assert [f["properties"]["kind"] for f in features] == ["internal"]

    def test_summary_output(self, squares):
        """Test the console summary when not quiet."""
        first, second = squares
        result = runner.invoke(app, ["clip", str(first), str(second)])
        assert result.exit_code == 0, result.output
        assert "Planeclip" in result.output

    def test_invalid_orientation(self, tmp_path, squares):
        """Test a clockwise shell is reported as an invalid polygon."""
        _, second = squares
        first = write_polygon(tmp_path / "cw.geojson", list(reversed(square(0, 0, 1, 1))))
        result = runner.invoke(app, ["clip", str(first), str(second), "-q"])
        assert result.exit_code == 1
        assert not (tmp_path / "cw-clips.geojson").exists()

    def test_more_than_one_polygon(self, tmp_path, squares):
        """Test a file with several polygons is rejected."""
        _, second = squares
        first = tmp_path / "many.geojson"
        first.write_text(
            json.dumps({"type": "MultiPolygon", "coordinates": [[square(0, 0, 1, 1)], [square(3, 3, 4, 4)]]}),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["clip", str(first), str(second), "-q"])
        assert result.exit_code == 1

    def test_unknown_algorithm(self, squares):
        """Test an unknown engine name is a usage error."""
        first, second = squares
        result = runner.invoke(app, ["clip", str(first), str(second), "-a", "vatti"])
        assert result.exit_code == 2
