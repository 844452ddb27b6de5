"""Click CLI commands for building wall meshes from floor plans."""

import logging

import click

from .builder import BuildingGenerator
from .constants import (DEFAULT_HEIGHT, DEFAULT_RADIUS, DEFAULT_CORNER_COUNT,
                        MIN_CORNER_COUNT, MAX_CORNER_COUNT, LOG_FORMAT)
from .footprint import load_footprint

logger = logging.getLogger(__name__)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose: bool):
    """Floor plan CLI for extruding building footprints into wall meshes."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format=LOG_FORMAT)


@cli.command()
@click.option('--corners', '-c', default=DEFAULT_CORNER_COUNT,
              type=click.IntRange(MIN_CORNER_COUNT, MAX_CORNER_COUNT),
              help='Number of footprint corners')
@click.option('--radius', '-r', default=DEFAULT_RADIUS,
              type=click.FloatRange(min=0, min_open=True),
              help='Distance of the corners from the center')
@click.option('--height', '-h', 'height', default=DEFAULT_HEIGHT, type=float,
              help='Extrusion height')
@click.option('--center', nargs=3, type=float, default=(0.0, 0.0, 0.0),
              help='Center of the footprint (X Y Z)')
@click.option('--color', nargs=4, type=float, default=None,
              help='Base colour as RGBA in 0-1')
@click.option('--output', '-o', default='building.glb', help='Output file path')
def regular(corners: int, radius: float, height: float, center, color, output: str):
    """Build walls on a regular polygon footprint."""
    generator = BuildingGenerator(height=height, material=color)
    try:
        generator.generate_corners(corners, radius, center=center)
        _build(generator, output)
    except (ValueError, OSError) as e:
        logger.error(f"Error building walls: {e}")
        raise click.ClickException(str(e))


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--height', '-h', 'height', default=None, type=float,
              help='Extrusion height (overrides the file)')
@click.option('--orient', is_flag=True,
              help='Reverse footprints whose walls would face inward')
@click.option('--output', '-o', default='building.glb', help='Output file path')
def footprint(path: str, height, orient: bool, output: str):
    """Build walls on the footprint stored in a JSON file."""
    try:
        data = load_footprint(path)
        if height is None:
            height = data.height if data.height is not None else DEFAULT_HEIGHT
        generator = BuildingGenerator(height=height, corners=data.corners,
                                      up=data.up, name=data.name, orient=orient)
        _build(generator, output)
    except (ValueError, OSError) as e:
        logger.error(f"Error building walls: {e}")
        raise click.ClickException(str(e))


def _build(generator: BuildingGenerator, output: str):
    mesh = generator.regenerate()
    path = generator.export(output)
    click.echo(f"{mesh.name}: {mesh.vertex_count} vertices, "
               f"{mesh.triangle_count} triangles -> {path}")


if __name__ == '__main__':
    cli()
