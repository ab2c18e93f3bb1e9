import typer
import yaml
from pathlib import Path
from typing import List, Optional
from typing_extensions import Annotated

from dotenv import load_dotenv, find_dotenv
from rich.markup import escape

from xrdgen.crd.derive import for_composite_resource, for_composite_resource_claim
from xrdgen.crd.generator import XRDCRDManager
from xrdgen.exception import XRDGenError
from xrdgen.utils import log, setup_logging

load_dotenv(find_dotenv(usecwd=True))

app = typer.Typer(
    help="xrdgen: derive composite and claim CRDs from composite resource definitions",
    add_completion=False,
)

MARKUP = {"markup": True}


@app.callback()
def main_callback(
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Log level (defaults to $LOG_LEVEL or INFO)"),
    ] = None,
):
    setup_logging(log_level)


@app.command("generate")
def generate(
    root: Annotated[
        Path, typer.Argument(help="Directory whose subdirectories hold XRD files")
    ] = Path("."),
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output directory (default: <root>/crds)"),
    ] = None,
    pattern: Annotated[
        Optional[List[str]],
        typer.Option("-p", "--pattern", help="XRD file name, may be repeated"),
    ] = None,
    force: Annotated[bool, typer.Option("--force", help="Force regeneration")] = False,
    validate: Annotated[
        bool, typer.Option("--validate", help="Validate generated CRDs")
    ] = False,
):
    """Generate composite and claim CRD YAML files for every XRD under ROOT."""
    try:
        manager = XRDCRDManager(root_dir=root, output_dir=output, patterns=pattern)
        report = manager.generate_all_crds(force=force)
    except (XRDGenError, OSError) as e:
        log.error(f"[red]Failed to generate CRDs:[/red] {escape(str(e))}", extra=MARKUP)
        raise typer.Exit(1)

    if report.skipped:
        typer.echo("No CRDs generated (XRDs unchanged)")
        return

    typer.echo(f"Generated {len(report.generated)} CRD(s) in {manager.output_dir}")

    if not report.ok:
        for failure in report.failures:
            typer.echo(
                f"'{failure.kind}' failed for {failure.path}: {failure.message}",
                err=True,
            )
        raise typer.Exit(1)

    if validate:
        if manager.validate_generated_crds():
            typer.echo("CRD validation passed")
        else:
            typer.echo("CRD validation failed", err=True)
            raise typer.Exit(1)


@app.command("render")
def render(
    xrd_path: Annotated[Path, typer.Argument(help="XRD YAML file")],
    claim: Annotated[
        bool, typer.Option("--claim", help="Render the claim CRD instead")
    ] = False,
):
    """Print the composite (or claim) CRD derived from one XRD."""
    generator = for_composite_resource_claim if claim else for_composite_resource
    try:
        xrd = XRDCRDManager.load_xrd(xrd_path)
        crd = generator(xrd)
    except XRDGenError as e:
        typer.echo(f"Failed to render {xrd_path}: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(
        yaml.dump(crd.to_manifest(), default_flow_style=False, sort_keys=False),
        nl=False,
    )


@app.command("validate-crds")
def validate_crds(
    root: Annotated[Path, typer.Argument(help="Project root directory")] = Path("."),
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="CRD directory (default: <root>/crds)"),
    ] = None,
):
    """Validate previously generated CRD files."""
    manager = XRDCRDManager(root_dir=root, output_dir=output)
    if manager.validate_generated_crds():
        typer.echo("CRD validation passed")
    else:
        typer.echo("CRD validation failed", err=True)
        raise typer.Exit(1)
