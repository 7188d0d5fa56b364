"""CLI entry-point for the plane-fitting pipeline."""

from __future__ import annotations

import logging

import click

from planefit.pipeline.process import process_scan_to_json


@click.group()
def main():
    """Robust plane fitting for 3D point clouds."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s | %(name)s | %(message)s",
    )


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", "output_file", default=None, help="Output JSON path.")
@click.option("--threshold", default=0.02, show_default=True, help="Inlier distance threshold (metres).")
@click.option("--iterations", default=1000, show_default=True, help="RANSAC trials.")
@click.option("--seed", default=42, show_default=True, help="RANSAC random seed.")
@click.option("--workers", default=1, show_default=True, help="Threads evaluating RANSAC trials.")
@click.option(
    "--colored", "colored_output", default=None,
    type=click.Path(dir_okay=False),
    help="Also write a PLY with inliers green and outliers red.",
)
def process(
    input_file: str,
    output_file: str | None,
    threshold: float,
    iterations: int,
    seed: int,
    workers: int,
    colored_output: str | None,
):
    """Fit a plane to a point-cloud file and print the fit report JSON."""
    try:
        json_str = process_scan_to_json(
            input_file,
            output_path=output_file,
            threshold=threshold,
            iterations=iterations,
            seed=seed,
            workers=workers,
            colored_output=colored_output,
        )
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    click.echo(json_str)


if __name__ == "__main__":
    main()
