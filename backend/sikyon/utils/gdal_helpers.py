"""Execution wrapper for GDAL/OGR command-line utilities.

Survey layers usually start life as shapefiles exported from the field
GIS. They are turned into the GeoJSON layer files the service reads with
``ogr2ogr``, which this module runs as a subprocess. A missing executable
or a non-zero exit status raises CommandError carrying the tool's stderr.

Example:
    >>> from sikyon.utils.gdal_helpers import run_command, CommandError
    >>> try:
    ...     run_command(["ogr2ogr", "-f", "GeoJSON", "out.geojson", "in.shp"])
    ... except CommandError as e:
    ...     print(f"Conversion failed: {e}")
"""

from __future__ import annotations

import shutil
import subprocess
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    import pathlib
    from collections.abc import Iterable


class CommandError(RuntimeError):
    """Exception raised when a GDAL/OGR subprocess command fails.

    The message is the command's stderr output, or a short description when
    the executable is not installed.
    """


def run_command(
    command: Iterable[str | pathlib.Path],
    workdir: pathlib.Path | None = None,
) -> str:
    """Execute a command and raise on non-zero exit.

    Args:
        command: Executable followed by its arguments.
        workdir: Optional working directory for the command execution.

    Returns:
        The command's standard output.

    Raises:
        CommandError: If the executable cannot be found or exits with a
            non-zero status code.
    """
    args = [str(part) for part in command]
    if not args or shutil.which(args[0]) is None:
        raise CommandError(f"Executable not found: {args[0] if args else ''}")

    logger.debug("Running {}", " ".join(args))
    result = subprocess.run(
        args,
        cwd=workdir,
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        raise CommandError(result.stderr.strip() or "Unknown command failure")
    return result.stdout
