"""Unit tests for the geometry I/O layer.

Tests for GeometryReader, GeometryWriter, and converter functions.
"""

import json
from pathlib import Path

import pytest

from planeclip.core.greiner_hormann import ClipResult
from planeclip.domain import Clip, Coordinate, as_ring
from planeclip.exceptions import GeometryLoadError, GeometrySaveError
from planeclip.io.reader import GeometryReader
from planeclip.io.writer import GeometryWriter, clip_to_feature

SQUARE = [[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]
HOLE = [[2, 2], [2, 4], [4, 4], [4, 2], [2, 2]]


def write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestGeometryReader:
    """Tests for GeometryReader class."""

    def test_init(self):
        """Test GeometryReader initialization."""
        path = Path("shapes.geojson")
        reader = GeometryReader(path)
        assert reader.path == path

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises GeometryLoadError."""
        reader = GeometryReader(Path("nonexistent.geojson"))
        with pytest.raises(GeometryLoadError, match="file not found"):
            reader.load()

    def test_geometry_count_before_load(self):
        """Test accessing geometry_count before loading raises RuntimeError."""
        reader = GeometryReader(Path("shapes.geojson"))
        with pytest.raises(RuntimeError, match="Geometry not loaded"):
            _ = reader.geometry_count

    def test_polygons_before_load(self):
        """Test reading polygons before loading raises RuntimeError."""
        reader = GeometryReader(Path("shapes.geojson"))
        with pytest.raises(RuntimeError, match="Geometry not loaded"):
            reader.polygons()

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON is reported with the file path."""
        path = tmp_path / "broken.geojson"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(GeometryLoadError) as excinfo:
            GeometryReader(path).load()
        assert excinfo.value.path == str(path)

    def test_unsupported_geometry(self, tmp_path):
        """Test unknown geometry types are rejected."""
        path = write_json(tmp_path / "odd.geojson", {"type": "Circle", "radius": 3})
        with pytest.raises(GeometryLoadError, match="unsupported geometry type"):
            GeometryReader(path).load()

    def test_polygon_geometry(self, tmp_path):
        """Test a bare GeoJSON Polygon with a hole."""
        path = write_json(tmp_path / "p.geojson", {"type": "Polygon", "coordinates": [SQUARE, HOLE]})
        with GeometryReader(path) as reader:
            (polygon,) = reader.polygons()
        assert polygon.shell[1] == Coordinate(10, 0)
        assert len(polygon.holes) == 1
        assert polygon.area == pytest.approx(96.0)

    def test_feature_collection(self, tmp_path):
        """Test features, multipolygons and points in one collection."""
        data = {
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "properties": {}, "geometry": {"type": "Polygon", "coordinates": [SQUARE]}},
                {
                    "type": "Feature",
                    "properties": {},
                    "geometry": {"type": "MultiPolygon", "coordinates": [[SQUARE], [SQUARE, HOLE]]},
                },
                {"type": "Feature", "properties": {}, "geometry": {"type": "Point", "coordinates": [1, 1]}},
                {"type": "Feature", "properties": {}, "geometry": None},
            ],
        }
        path = write_json(tmp_path / "fc.geojson", data)
        with GeometryReader(path) as reader:
            assert reader.geometry_count == 2
            polygons = reader.polygons()
        assert len(polygons) == 3
        assert [len(p.holes) for p in polygons] == [0, 0, 1]

    def test_shell_holes_object(self, tmp_path):
        """Test the plain shell/holes format."""
        path = write_json(tmp_path / "p.json", {"shell": SQUARE, "holes": [HOLE]})
        with GeometryReader(path) as reader:
            (polygon,) = reader.polygons()
        assert polygon.holes[0][0] == Coordinate(2, 2)

    def test_rings_include_lines(self, tmp_path):
        """Test rings() returns line strings and polygon rings in order."""
        data = {
            "type": "GeometryCollection",
            "geometries": [
                {"type": "LineString", "coordinates": [[0, 0], [1, 1]]},
                {"type": "MultiLineString", "coordinates": [[[0, 1], [1, 0]], [[2, 2], [3, 3]]]},
                {"type": "Polygon", "coordinates": [SQUARE, HOLE]},
            ],
        }
        path = write_json(tmp_path / "lines.geojson", data)
        with GeometryReader(path) as reader:
            rings = reader.rings()
            assert reader.polygons()[0].shell == tuple(as_ring(SQUARE))
        assert len(rings) == 5
        assert rings[0] == as_ring([[0, 0], [1, 1]])
        assert rings[4] == as_ring(HOLE)

    def test_malformed_coordinates(self, tmp_path):
        """Test non-numeric coordinates are reported as load errors."""
        path = write_json(tmp_path / "bad.geojson", {"type": "Polygon", "coordinates": [[["a", "b"]]]})
        with GeometryReader(path) as reader:
            with pytest.raises(GeometryLoadError, match="malformed"):
                reader.polygons()

    def test_close(self, tmp_path):
        """Test close() releases parsed geometries."""
        path = write_json(tmp_path / "p.geojson", {"type": "Polygon", "coordinates": [SQUARE]})
        reader = GeometryReader(path)
        reader.load()
        reader.close()
        with pytest.raises(RuntimeError):
            reader.rings()


class TestClipToFeature:
    """Tests for clip_to_feature converter."""

    def test_feature_layout(self):
        """Test a clip becomes a GeoJSON Polygon feature."""
        clip = Clip(shell=tuple(as_ring(SQUARE)), holes=(tuple(as_ring(HOLE)),))
        feature = clip_to_feature(clip, "internal", 3)
        assert feature["type"] == "Feature"
        assert feature["properties"] == {"kind": "internal", "index": 3, "area": pytest.approx(96.0)}
        assert feature["geometry"]["type"] == "Polygon"
        assert feature["geometry"]["coordinates"][0][1] == [10.0, 0.0]
        assert len(feature["geometry"]["coordinates"]) == 2

    def test_rounding(self):
        """Test coordinates are rounded when digits are given."""
        clip = Clip(shell=tuple(as_ring([(0, 0), (1 / 3, 0), (0, 2 / 3), (0, 0)])))
        feature = clip_to_feature(clip, "external_a", 0, digits=2)
        assert feature["geometry"]["coordinates"][0][1] == [0.33, 0.0]


class TestGeometryWriter:
    """Tests for GeometryWriter class."""

    def test_init(self):
        """Test GeometryWriter initialization."""
        path = Path("output.geojson")
        writer = GeometryWriter(path)
        assert writer.output_path == path

    def test_write_clips(self, tmp_path):
        """Test clips of every kind are written with their kind."""
        square = Clip(shell=tuple(as_ring(SQUARE)))
        result = ClipResult(internal=(square,), external_a=(square, square), external_b=())
        path = tmp_path / "clips.geojson"
        count = GeometryWriter(path).write_clips(result)
        assert count == 3
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["type"] == "FeatureCollection"
        assert [f["properties"]["kind"] for f in data["features"]] == ["internal", "external_a", "external_a"]
        assert [f["properties"]["index"] for f in data["features"]] == [0, 0, 1]

    def test_write_intersections(self, tmp_path):
        """Test intersection points are written as Point features."""
        path = tmp_path / "points.geojson"
        count = GeometryWriter(path, indent=None).write_intersections([Coordinate(1, 2)], [(0, 3)])
        assert count == 1
        (feature,) = json.loads(path.read_text(encoding="utf-8"))["features"]
        assert feature["geometry"] == {"type": "Point", "coordinates": [1.0, 2.0]}
        assert feature["properties"] == {"edges": [0, 3]}

    def test_save_error(self, tmp_path):
        """Test an unwritable path raises GeometrySaveError."""
        path = tmp_path / "missing" / "out.geojson"
        with pytest.raises(GeometrySaveError) as excinfo:
            GeometryWriter(path).write_intersections([], [])
        assert excinfo.value.path == str(path)

    def test_get_output_path(self):
        """Test output path generation."""
        output = GeometryWriter.get_output_path(Path("/data/shapes.geojson"), "clips")
        assert output == Path("/data/shapes-clips.geojson")

    def test_get_output_path_json(self):
        """Test output path generation for plain JSON input."""
        output = GeometryWriter.get_output_path(Path("lines.json"), "intersections")
        assert output == Path("lines-intersections.geojson")
