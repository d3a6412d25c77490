import json

import typer

from .scorecard import Grade, Scorecard

GRADE_COLORS = {
    Grade.Critical: typer.colors.RED,
    Grade.Warning: typer.colors.YELLOW,
    Grade.AllOK: typer.colors.GREEN,
}
GRADE_LABELS = {
    Grade.Critical: "CRITICAL",
    Grade.Warning: "WARNING",
    Grade.AllOK: "OK",
}


def render_human(scorecard: Scorecard, verbose: bool = False, color: bool | None = None) -> None:
    """Print the scorecard in a human readable form.

    :param scorecard: the scorecard to print
    :param verbose: if the flag is set, checks without findings are printed as well
    :param color: force or disable colored output. Defaults to auto-detection
    :return: None
    """
    for entry in scorecard:
        obj = entry.object
        namespace = f" in {obj.namespace}" if obj.namespace else ""
        location = f" ({obj.location})" if obj.location else ""
        typer.secho(
            f"{obj.api_version}/{obj.kind} {obj.name}{namespace}{location}",
            fg=GRADE_COLORS[entry.grade],
            bold=True,
            color=color,
        )
        for score in entry.scores:
            if score.grade == Grade.AllOK and not verbose:
                continue
            typer.secho(
                f"    [{GRADE_LABELS[score.grade]}] {score.check_name}", fg=GRADE_COLORS[score.grade], color=color
            )
            for comment in score.comments:
                path = f"{comment.path} -> " if comment.path else ""
                typer.echo(f"        · {path}{comment.summary}", color=color)
                if comment.description:
                    typer.echo(f"            {comment.description}", color=color)


def render_json(scorecard: Scorecard) -> str:
    return json.dumps(scorecard.to_dict(), indent=2)


def render_csv(scorecard: Scorecard) -> str:
    return scorecard.to_dataframe().to_csv(index=False)
