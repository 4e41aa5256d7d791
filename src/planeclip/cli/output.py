"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables, summaries and formatted messages.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from planeclip.core.greiner_hormann import ClipResult
from planeclip.domain import Coordinate

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

MAX_TABLE_ROWS = 50


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Planeclip[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_input_info(path: str, ring_count: int, polygon_count: int | None = None) -> None:
    """Print input file information.

    Args:
        path: Path to the input file
        ring_count: Number of rings read
        polygon_count: Number of polygons read, if relevant
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    console.print(line)
    if polygon_count is None:
        console.print(f"  {ring_count:,} rings")
    else:
        console.print(f"  {polygon_count:,} polygons {SYM_DOT} {ring_count:,} rings")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_intersection_table(
    points: Sequence[Coordinate],
    edges: Sequence[tuple[int, int]],
) -> None:
    """Print intersections as a table.

    Args:
        points: Intersection coordinates
        edges: Edge pair of each intersection
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("edges")
    for index, (point, (first, second)) in enumerate(zip(points, edges)):
        if index == MAX_TABLE_ROWS:
            break
        table.add_row(str(index), f"{point.x:g}", f"{point.y:g}", f"{first}, {second}")
    console.print(table)
    if len(points) > MAX_TABLE_ROWS:
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(points) - MAX_TABLE_ROWS} more)")


def print_simplicity(results: Sequence[bool]) -> None:
    """Print the simplicity check of each ring.

    Args:
        results: Whether each ring is simple, in file order
    """
    for index, simple in enumerate(results):
        mark = f"[green]{SYM_OK}[/green]" if simple else f"[red]{SYM_ERR}[/red]"
        label = "simple" if simple else "self-intersecting"
        console.print(f"  {mark} ring {index} {SYM_DOT} {label}")


def print_clip_summary(result: ClipResult, algorithm: str) -> None:
    """Print the clip counts and areas of a clipping operation.

    Args:
        result: Clipping result
        algorithm: Name of the engine used
    """
    console.print(f"  {algorithm}")
    for label, clips in (
        ("internal", result.internal),
        ("external A", result.external_a),
        ("external B", result.external_b),
    ):
        area = sum(clip.area for clip in clips)
        holes = sum(len(clip.holes) for clip in clips)
        console.print(f"  {label:<12}{len(clips)} clips {SYM_DOT} {holes} holes {SYM_DOT} area {area:g}")


def print_success(output_path: str | None, total_time_s: float, summary: str) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file, if one was written
        total_time_s: Total run time in seconds
        summary: One-line result summary
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")
    if output_path is not None:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)
    console.print(f"  {summary}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
