"""CLI entry point for AdaptQuiz."""

import logging
import sys

import click

from adaptquiz.config.settings import Settings

FINISH_COMMAND = ":finish"


def _load_engine(settings: Settings, catalog_id: str | None):
    from adaptquiz.catalogs.registry import CatalogRegistry
    from adaptquiz.engine.assessment import AssessmentEngine

    registry = CatalogRegistry(catalogs_dir=settings.catalogs_dir)
    try:
        bank = registry.load_bank(catalog_id or settings.catalog)
    except ValueError as e:
        raise click.ClickException(str(e))
    return registry, AssessmentEngine(bank, session_length=settings.session_length)


@click.group(invoke_without_command=True)
@click.option("--verbose", is_flag=True, help="Log engine decisions to stderr")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """AdaptQuiz — adaptive assessment and diagnostic practice."""
    ctx.ensure_object(dict)
    settings = ctx.obj.get("settings") or Settings.load()
    ctx.obj["settings"] = settings
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        ctx.invoke(launch)


@main.command()
@click.pass_context
def launch(ctx: click.Context) -> None:
    """Launch the interactive terminal UI."""
    from adaptquiz.app.main_app import AdaptQuizApp

    app = AdaptQuizApp(settings=ctx.obj["settings"])
    app.run()


@main.command()
@click.pass_context
def catalogs(ctx: click.Context) -> None:
    """List available question catalogs."""
    from adaptquiz.catalogs.registry import CatalogRegistry

    registry = CatalogRegistry(catalogs_dir=ctx.obj["settings"].catalogs_dir)
    for catalog in registry.list_catalogs():
        click.echo(f"  {catalog.id}: {catalog.title} (v{catalog.version})")


@main.command()
@click.option("--level", type=click.Choice(["easy", "medium", "hard"]), default=None)
@click.option("--chapter", default="All", show_default=True, help="Chapter label or 'All'")
@click.option("--catalog", "catalog_id", default=None, help="Catalog id (default from settings)")
@click.pass_context
def questions(ctx: click.Context, level: str | None, chapter: str, catalog_id: str | None) -> None:
    """Print the question bank, optionally filtered."""
    _, engine = _load_engine(ctx.obj["settings"], catalog_id)

    selected = engine.questions_by_chapter(chapter)
    if level is not None:
        by_level = set(engine.questions_by_level(level))
        selected = tuple(q for q in selected if q in by_level)

    if not selected:
        click.echo("No questions match.")
        return
    for q in selected:
        click.echo(f"  [{q.id}] ({q.level.value}, {q.fundamental.value}, {q.chapter}) {q.text}")


@main.command()
@click.option("--student", default=None, help="Name of the student taking the quiz")
@click.option("--catalog", "catalog_id", default=None, help="Catalog id (default from settings)")
@click.pass_context
def quiz(ctx: click.Context, student: str | None, catalog_id: str | None) -> None:
    """Run one adaptive assessment in the terminal."""
    settings = ctx.obj["settings"]
    registry, engine = _load_engine(settings, catalog_id)

    if student is None:
        meta = registry.get_catalog(catalog_id or settings.catalog)
        names = [s.name for s in meta.students] if meta else []
        if names:
            student = click.prompt("Student", type=click.Choice(names, case_sensitive=False))
    if student:
        click.echo(f"Signed in as {student}")

    engine.start_session()
    click.echo(f"Type {FINISH_COMMAND} to finish early.\n")

    while not engine.should_end():
        question = engine.active_question()
        state = engine.state
        if question is None:
            click.echo(f"No questions for level {state.level.value}.")
            engine.finish()
            break

        click.echo(f"Question {state.cursor + 1} — Level: {state.level.value.upper()}")
        answer = click.prompt(question.text, default="", show_default=False)
        if answer.strip() == FINISH_COMMAND:
            engine.finish()
            break

        event = engine.submit_answer(question, answer)
        if event.correct:
            click.secho("Correct ✓\n", fg="green")
        else:
            click.secho("Incorrect ✗\n", fg="red")

    _print_report(engine)


def _print_report(engine) -> None:
    state = engine.state
    click.echo(f"Answered {state.answered}, correct {state.correct_count}.")
    click.echo("\nKey insights:")
    for i, rec in enumerate(engine.recommendations(), start=1):
        click.echo(f"  {i}. {rec.fundamental.value.upper()}: {rec.count} flagged")
    plan = engine.practice_plan()
    if plan:
        click.echo("\nSuggested plan:")
        for line in plan:
            click.echo(f"  - {line}")


@main.command()
@click.option("--session-length", type=click.IntRange(min=1), default=None)
@click.option("--feedback-delay", type=click.FloatRange(min=0), default=None)
@click.pass_context
def config(ctx: click.Context, session_length: int | None, feedback_delay: float | None) -> None:
    """Show or update settings."""
    settings = ctx.obj["settings"]
    if session_length is not None or feedback_delay is not None:
        if session_length is not None:
            settings.session_length = session_length
        if feedback_delay is not None:
            settings.feedback_delay_seconds = feedback_delay
        settings.save()
        click.echo(f"Saved {settings.config_path}")

    for key, value in settings.model_dump(mode="json").items():
        click.echo(f"  {key}: {value}")
