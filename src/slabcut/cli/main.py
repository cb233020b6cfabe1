"""Typer CLI for slab optimisation."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from slabcut.application.config import (
    ConfigError,
    config_to_factory,
    config_to_multi_material_request,
    config_to_pieces,
    config_to_request,
    config_to_slab_dimensions,
    load_config,
)
from slabcut.application.multi_material import MultiMaterialResult, multi_result_to_dict
from slabcut.cli.commands import display_load_error, validate_command
from slabcut.domain.errors import ValidationError
from slabcut.domain.services import OversizeDecomposer, compute_fingerprint
from slabcut.domain.value_objects import Piece
from slabcut.infrastructure import (
    CutPlanFormatter,
    JsonExporter,
    LaminationReportFormatter,
    OptimizationResult,
    SlabReportFormatter,
)

app = typer.Typer(
    name="slabcut",
    help="Lay out stone benchtop pieces on slabs and report waste.",
)

# Register validate command
app.command(name="validate")(validate_command)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _format_text(result: OptimizationResult) -> str:
    sections = [SlabReportFormatter().format(result)]
    if result.cut_plans:
        sections.append(CutPlanFormatter().format(result.cut_plans))
    if result.lamination_summary.groups:
        sections.append(LaminationReportFormatter().format(result.lamination_summary))
    if result.warnings:
        sections.append("WARNINGS\n" + "\n".join(f"  {w}" for w in result.warnings))
    return "\n\n".join(sections)


def _format_multi_text(result: MultiMaterialResult) -> str:
    sections = []
    for group in result.groups:
        header = (
            f"MATERIAL: {group.material_name} "
            f"({group.slab_width:g}x{group.slab_height:g} slabs)"
        )
        sections.append(header + "\n\n" + _format_text(group.result))
    sections.append(
        f"TOTAL: {result.total_slab_count} slabs, "
        f"{result.total_waste_percentage:.1f}% waste"
    )
    if result.unassigned:
        sections.append(f"Unassigned pieces: {', '.join(result.unassigned)}")
    return "\n\n".join(sections)


def _emit(text: str, output_file: Path | None) -> None:
    if output_file is None:
        typer.echo(text)
        return
    output_file.write_text(text, encoding="utf-8")
    typer.echo(f"Wrote {output_file}")


@app.command()
def optimize(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the report to this file"),
    ] = None,
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", "-k", help="Blade width in mm (overrides the job)"),
    ] = None,
    no_rotation: Annotated[
        bool,
        typer.Option("--no-rotation", help="Never turn pieces on the slab"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log placement decisions"),
    ] = False,
) -> None:
    """Optimise a job and print the slab layout."""
    _configure_logging(verbose)

    if output_format not in ("text", "json"):
        typer.echo(f"Unknown format: {output_format}. Use text or json.", err=True)
        raise typer.Exit(code=1)

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    if kerf is not None:
        config.optimizer.kerf = kerf
    if no_rotation:
        config.optimizer.allow_rotation = False

    factory = config_to_factory(config)
    try:
        if config.is_multi_material:
            multi = factory.create_multi_material_optimizer().optimize(
                config_to_multi_material_request(config)
            )
            text = (
                json.dumps(multi_result_to_dict(multi), indent=2)
                if output_format == "json"
                else _format_multi_text(multi)
            )
            unplaced = [u for g in multi.groups for u in g.result.unplaced]
        else:
            result = factory.create_optimize_command().execute(config_to_request(config))
            text = (
                JsonExporter().export(result)
                if output_format == "json"
                else _format_text(result)
            )
            unplaced = list(result.unplaced)
    except ValidationError as e:
        for error in e.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    _emit(text, output_file)
    if unplaced:
        typer.echo(f"Warning: {len(unplaced)} unit(s) not placed", err=True)


@app.command()
def fingerprint(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file"),
    ],
) -> None:
    """Print the input fingerprint of a job."""
    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    width, height = config_to_slab_dimensions(config)
    typer.echo(
        compute_fingerprint(config_to_pieces(config), config.optimizer.kerf, width, height)
    )


@app.command()
def plan(
    length: Annotated[float, typer.Option("--length", "-l", help="Piece length in mm")],
    width: Annotated[float, typer.Option("--width", "-w", help="Piece width in mm")],
    slab_width: Annotated[float, typer.Option("--slab-width", help="Slab width in mm")] = 3200.0,
    slab_height: Annotated[float, typer.Option("--slab-height", help="Slab height in mm")] = 1600.0,
    kerf: Annotated[float, typer.Option("--kerf", "-k", help="Blade width in mm")] = 3.0,
    edge_allowance: Annotated[
        float, typer.Option("--edge-allowance", help="Unusable mm at each slab edge")
    ] = 0.0,
    no_rotation: Annotated[
        bool, typer.Option("--no-rotation", help="Never turn pieces on the slab")
    ] = False,
) -> None:
    """Show how a single piece would be split to fit a slab."""
    try:
        piece = Piece(id="piece", length=length, width=width)
    except ValidationError as e:
        for error in e.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    if kerf < 0 or slab_width <= 0 or slab_height <= 0:
        typer.echo("Error: slab dimensions must be positive and kerf non-negative", err=True)
        raise typer.Exit(code=1)

    decomposer = OversizeDecomposer.for_slab(
        slab_width,
        slab_height,
        kerf,
        edge_allowance=edge_allowance,
        allow_rotation=not no_rotation,
    )
    decomposition = decomposer.decompose(piece)

    if decomposition.unplaced:
        for unit in decomposition.unplaced:
            typer.echo(f"Cannot place: {unit.reason}", err=True)
        raise typer.Exit(code=1)
    if not decomposition.cut_plans:
        typer.echo(f"{length:g}x{width:g} fits on a single {slab_width:g}x{slab_height:g} slab.")
        return
    typer.echo(CutPlanFormatter().format(decomposition.cut_plans))


if __name__ == "__main__":
    app()
