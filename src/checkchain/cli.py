from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="checkchain", help="Run batches of composable assertions")

EXAMPLE_SUITE = """\
workdir: .
assertions:
  - file_exists: checks.yaml
    message: checks.yaml is missing
  - all_of:
      - command_succeeds: "python3 --version"
      - file_contains:
          path: checks.yaml
          pattern: "assertions:"
    merge: concat
  - any_of:
      - env_set: CI
      - file_exists: checks.yaml
    message: needs CI or a local checks.yaml
"""


@app.command()
def run(
    config: str = typer.Argument(help="Path to suite YAML config"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    log_file: str | None = typer.Option(
        None, "--log-file", help="Also write debug output to this file"
    ),
):
    """Execute every assertion of a suite in order, stopping at the first failure."""
    import yaml

    from checkchain.config import build_batch, load_config
    from checkchain.verbose import setup_logger

    config_path = Path(config)
    if not config_path.is_file():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        suite_config = load_config(config_path)
    except (ValueError, yaml.YAMLError) as e:
        typer.echo(f"Error: invalid config {config}: {e}", err=True)
        raise typer.Exit(1)

    logger = setup_logger(
        Path(log_file) if log_file is not None else None, verbose=verbose
    )
    logger.debug(f"Loaded suite from {config_path}")

    batch = build_batch(suite_config)
    result = batch.exec_all(logger=logger)

    if not result.success:
        typer.echo(f"FAIL: {result.message}")
        raise typer.Exit(1)
    typer.echo(f"PASS ({len(batch)} assertions)")


@app.command()
def init(
    dir: str = typer.Option(".", "--dir", help="Directory to write checks.yaml into"),
):
    """Write an example suite config."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "checks.yaml"
    if example.exists():
        typer.echo(f"checks.yaml already exists in {dir}, skipping.")
        return

    example.write_text(EXAMPLE_SUITE)
    typer.echo(f"Wrote example suite: {example}")


@app.command()
def schema(
    out: str = typer.Option(
        "checkchain.schema.json", "--out", help="Output path for the JSON Schema"
    ),
):
    """Generate the JSON Schema of the suite YAML format."""
    from checkchain.schema import write_json_schema

    out_path = Path(out)
    write_json_schema(out_path)
    typer.echo(f"Wrote schema: {out_path}")
