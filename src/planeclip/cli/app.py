"""CLI application entry point for planeclip.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from planeclip import __version__
from planeclip.cli.output import (
    console,
    print_clip_summary,
    print_error,
    print_header,
    print_input_info,
    print_intersection_table,
    print_simplicity,
    print_step,
    print_success,
)
from planeclip.config import (
    ClippingAlgorithm,
    ClippingConfig,
    LoggingConfig,
    PlaneclipSettings,
    PrecisionConfig,
)
from planeclip.core import BentleyOttmannAlgorithm, create_clipper, is_simple
from planeclip.domain import Polygon, PrecisionModelType
from planeclip.exceptions import (
    GeometryLoadError,
    GeometrySaveError,
    InvalidArgumentError,
    PlaneclipError,
)
from planeclip.io import GeometryReader, GeometryWriter
from planeclip.utils import OperationLogger, configure_logging

# Create the Typer app
app = typer.Typer(
    name="planeclip",
    help="Report segment intersections and clip polygons with holes.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Planeclip[/bold blue] v{__version__}")
        raise typer.Exit()


OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Output GeoJSON path (default: {name}-{result}.geojson)",
    ),
]
FixedScaleOption = Annotated[
    float | None,
    typer.Option(
        "--fixed-scale",
        help="Snap computed coordinates to a grid of this size (default: floating precision)",
        min=0.0,
    ),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]
QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Minimal console output",
    ),
]
VersionOption = Annotated[
    bool | None,
    typer.Option(
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
]


def _settings(
    fixed_scale: float | None,
    log_file: Path | None,
    log_level: str,
    clipping: ClippingConfig | None = None,
) -> PlaneclipSettings:
    """Create settings from CLI arguments.

    Raises:
        typer.Exit: If the fixed scale is not positive
    """
    if fixed_scale is not None and fixed_scale <= 0:
        print_error(f"Invalid fixed scale: {fixed_scale}", details="The scale must be greater than 0.")
        raise typer.Exit(code=1)

    precision = (
        PrecisionConfig(model_type=PrecisionModelType.FIXED, scale=fixed_scale)
        if fixed_scale is not None
        else PrecisionConfig()
    )
    return PlaneclipSettings(
        precision=precision,
        clipping=clipping or ClippingConfig(),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )


def _start(settings: PlaneclipSettings, quiet: bool) -> OperationLogger:
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    operation = OperationLogger(logger)
    operation.stats.start_time = time.perf_counter()
    if not quiet:
        print_header(__version__)
    return operation


def _require_file(path: Path) -> None:
    if not path.exists():
        print_error(
            f"Input file not found: {path}",
            details=f"The file '{path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)
    if not path.is_file():
        print_error(
            f"Input path is not a file: {path}",
            details="Please provide a path to a GeoJSON or polygon JSON file.",
        )
        raise typer.Exit(code=1)


def _finish(operation: OperationLogger) -> float:
    operation.stats.end_time = time.perf_counter()
    return operation.stats.duration_seconds


@app.command()
def intersections(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="GeoJSON or polygon JSON file with rings or line strings",
            show_default=False,
        ),
    ],
    output: OutputOption = None,
    no_write: Annotated[
        bool,
        typer.Option(
            "--no-write",
            help="Print the intersections without writing a file",
        ),
    ] = False,
    fixed_scale: FixedScaleOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
    _version: VersionOption = None,  # noqa: ARG001
) -> None:
    """Report every intersection among the rings of a file.

    Every pair of non-consecutive edges that crosses, touches or overlaps
    is reported once per intersection point, with the pair of edge indices
    it came from.

    Example:
        planeclip intersections roads.geojson
    """
    _require_file(input_file)
    settings = _settings(fixed_scale, log_file, log_level)
    operation = _start(settings, quiet)

    try:
        if not quiet:
            print_step("Loading geometry")
        with GeometryReader(input_file) as reader:
            rings = reader.rings()
        operation.log_rings_loaded(str(input_file), len(rings))
        if not quiet:
            print_input_info(str(input_file), len(rings))

        if not quiet:
            print_step("Sweeping")
        started = time.perf_counter()
        algorithm = BentleyOttmannAlgorithm(rings, settings.precision.create_model())
        result = algorithm.compute()
        operation.log_intersections(
            str(input_file), len(result.intersections), (time.perf_counter() - started) * 1000
        )
        if not quiet:
            print_intersection_table(result.intersections, result.edge_indices)

        output_path = None
        if not no_write:
            output_path = output or GeometryWriter.get_output_path(input_file, "intersections")
            writer = GeometryWriter(output_path, settings.output.indent, settings.output.precision_digits)
            writer.write_intersections(result.intersections, result.edge_indices)

        if not quiet:
            print_success(
                str(output_path) if output_path else None,
                _finish(operation),
                f"{len(result.intersections)} intersections",
            )

    except GeometryLoadError as e:
        operation.log_error(str(input_file), e)
        print_error(f"Could not load geometry: {e.reason}")
        raise typer.Exit(code=1)
    except GeometrySaveError as e:
        operation.log_error(str(input_file), e)
        print_error(f"Could not save geometry: {e.reason}")
        raise typer.Exit(code=1)
    except PlaneclipError as e:
        operation.log_error(str(input_file), e)
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def check(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="GeoJSON or polygon JSON file with rings",
            show_default=False,
        ),
    ],
    fixed_scale: FixedScaleOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
    _version: VersionOption = None,  # noqa: ARG001
) -> None:
    """Check that every ring of a file is simple.

    Exits with code 2 if any ring intersects or touches itself.

    Example:
        planeclip check parcels.geojson
    """
    _require_file(input_file)
    settings = _settings(fixed_scale, log_file, log_level)
    operation = _start(settings, quiet)
    precision = settings.precision.create_model()

    try:
        with GeometryReader(input_file) as reader:
            rings = reader.rings()
        operation.log_rings_loaded(str(input_file), len(rings))

        if not quiet:
            print_step("Checking rings")
        results = []
        for index, ring in enumerate(rings):
            simple = is_simple(ring, precision)
            operation.log_simplicity(str(input_file), index, simple)
            results.append(simple)

    except GeometryLoadError as e:
        operation.log_error(str(input_file), e)
        print_error(f"Could not load geometry: {e.reason}")
        raise typer.Exit(code=1)
    except PlaneclipError as e:
        operation.log_error(str(input_file), e)
        print_error(str(e))
        raise typer.Exit(code=1)

    failed = results.count(False)
    if not quiet:
        print_simplicity(results)
        print_success(None, _finish(operation), f"{len(results) - failed} simple, {failed} self-intersecting")
    if failed:
        raise typer.Exit(code=2)


def _single_polygon(path: Path, name: str) -> Polygon:
    with GeometryReader(path) as reader:
        polygons = reader.polygons()
    if len(polygons) != 1:
        raise GeometryLoadError(str(path), f"expected one polygon for {name}, found {len(polygons)}")
    return polygons[0]


@app.command()
def clip(
    first_file: Annotated[
        Path,
        typer.Argument(
            help="File holding polygon A",
            show_default=False,
        ),
    ],
    second_file: Annotated[
        Path,
        typer.Argument(
            help="File holding polygon B",
            show_default=False,
        ),
    ],
    output: OutputOption = None,
    algorithm: Annotated[
        ClippingAlgorithm,
        typer.Option(
            "--algorithm",
            "-a",
            help="Clipping engine",
        ),
    ] = ClippingAlgorithm.GREINER_HORMANN,
    no_external: Annotated[
        bool,
        typer.Option(
            "--no-external",
            help="Only compute the internal clips (A ∩ B)",
        ),
    ] = False,
    fixed_scale: FixedScaleOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
    _version: VersionOption = None,  # noqa: ARG001
) -> None:
    """Clip two polygons with holes against each other.

    Writes the internal clips (A ∩ B) and, unless --no-external is given,
    the external clips of each polygon (A − B and B − A).

    Example:
        planeclip clip first.geojson second.geojson

    This will create first-clips.geojson.
    """
    _require_file(first_file)
    _require_file(second_file)
    settings = _settings(
        fixed_scale,
        log_file,
        log_level,
        ClippingConfig(algorithm=algorithm, compute_external_clips=not no_external),
    )
    operation = _start(settings, quiet)

    try:
        if not quiet:
            print_step("Loading polygons")
        first = _single_polygon(first_file, "first")
        second = _single_polygon(second_file, "second")
        operation.log_rings_loaded(str(first_file), len(first.rings))
        operation.log_rings_loaded(str(second_file), len(second.rings))
        if not quiet:
            print_input_info(str(first_file), len(first.rings), 1)
            print_input_info(str(second_file), len(second.rings), 1)

        if not quiet:
            print_step("Clipping")
        started = time.perf_counter()
        clipper = create_clipper(first, second, settings.clipping, settings.precision.create_model())
        result = clipper.compute()
        operation.log_clips(
            settings.clipping.algorithm.value,
            len(result.internal),
            len(result.external_a),
            len(result.external_b),
            (time.perf_counter() - started) * 1000,
        )
        if not quiet:
            print_clip_summary(result, settings.clipping.algorithm.value)

        output_path = output or GeometryWriter.get_output_path(first_file, "clips")
        writer = GeometryWriter(output_path, settings.output.indent, settings.output.precision_digits)
        written = writer.write_clips(result)

        if not quiet:
            print_success(str(output_path), _finish(operation), f"{written} clips")

    except GeometryLoadError as e:
        operation.log_error(str(first_file), e)
        print_error(f"Could not load geometry: {e.reason}")
        raise typer.Exit(code=1)
    except GeometrySaveError as e:
        operation.log_error(str(first_file), e)
        print_error(f"Could not save geometry: {e.reason}")
        raise typer.Exit(code=1)
    except InvalidArgumentError as e:
        operation.log_error(str(first_file), e)
        print_error("Invalid polygon", details=str(e))
        raise typer.Exit(code=1)
    except PlaneclipError as e:
        operation.log_error(str(first_file), e)
        print_error(str(e))
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
