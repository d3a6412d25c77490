from pathlib import Path
from typing import Optional

import typer

from kube_scorecard import engine
from kube_scorecard.checks import build_registry
from kube_scorecard.config import RunConfig
from kube_scorecard.constants import ExitCode, OutputFormat
from kube_scorecard.exceptions import ConfigurationError, ManifestParseError
from kube_scorecard.logging_config import setup_logging
from kube_scorecard.parser import read_sources
from kube_scorecard.renderers import render_csv, render_human, render_json
from kube_scorecard.version import KubernetesVersion

app = typer.Typer(name="kube-scorecard", no_args_is_help=True)


@app.command("score")
def score(
    files: list[Path] = typer.Argument(
        ..., help="The manifest files or directories to score. Use '-' to read from StdIn."
    ),
    kubernetes_version: Optional[str] = typer.Option(
        None,
        "--kubernetes-version",
        "-k",
        help="The Kubernetes version to target, e.g. 'v1.18'. Checks not supporting this version are skipped.",
    ),
    enable_optional_test: Optional[list[str]] = typer.Option(
        None, "--enable-optional-test", "-e", help="Enable an optional check by its id. Can be set multiple times."
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.Human, "--output-format", "-o", help="The output format"),
    exit_one_on_warning: bool = typer.Option(
        False, "--exit-one-on-warning", help="Exit with code 1 in case of warnings as well"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Also print the checks which passed"),
    workers: int = typer.Option(1, "--workers", help="The number of threads used for the evaluation"),
    log_level: str = typer.Option("WARNING", "--log-level", help="The minimum level of log messages on StdErr"),
) -> None:
    """
    Score the given manifests and print the scorecard.
    Exits with code 1 if any critical issue is found.
    """
    try:
        config = RunConfig(
            kubernetes_version=KubernetesVersion.parse(kubernetes_version) if kubernetes_version else None,
            enabled_optional_checks=frozenset(enable_optional_test or []),
            max_workers=workers,
            log_level=log_level,
        )
        config.validate()
        setup_logging(config.log_level)
        scorecard = engine.score_sources(read_sources(files), config)
    except (ConfigurationError, ManifestParseError, OSError) as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(ExitCode.Error)

    if output_format == OutputFormat.Json:
        typer.echo(render_json(scorecard))
    elif output_format == OutputFormat.Csv:
        typer.echo(render_csv(scorecard), nl=False)
    else:
        render_human(scorecard, verbose=verbose)

    if scorecard.has_critical or (exit_one_on_warning and scorecard.has_warning):
        raise typer.Exit(ExitCode.Failed)


@app.command("list")
def list_checks() -> None:
    """
    List all available checks.
    """
    for check in build_registry():
        kinds = ", ".join(sorted(check.target_kinds))
        flags = "optional" if check.optional else "default"
        typer.echo(f"{check.check_id}\t{check.name}\t{flags}\t{check.version_range}\t{kinds}")
        if check.comment:
            typer.echo(f"\t{check.comment}")


if __name__ == "__main__":
    app()
