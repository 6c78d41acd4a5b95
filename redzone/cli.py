#!/usr/bin/env python3
"""
Command-line interface for the recruiting tracker.

Each command group corresponds to one panel of the tracker:

Commands:
    playbook   - Recruiting checklist
    profile    - Athlete profile, achievements, JSON export/import
    schools    - Target school list with fit scores
    outreach   - Log of contacts with coaching staff
    media      - Highlight reel plan
    bot        - Scripted recruiting assistant
    resources  - Useful links
    settings   - Brand name and bot name

All state is kept in a local store file (REDZONE_STORE_PATH, default
outs/redzone_store.json). Changes are saved automatically.
"""

from pathlib import Path
from typing import Optional

import typer

from redzone.contexts.persistence import PersistenceUnavailableError, open_store
from redzone.contexts.tracker import (
    PROFILE_FIELDS,
    Division,
    EntityStore,
    ProfileImportError,
    Sender,
)
from redzone.utils import config
from redzone.utils.logger import setup_console_logger, setup_logger

app = typer.Typer(
    add_completion=False,
    help="Track your college recruiting journey",
    invoke_without_command=True,
)
playbook_app = typer.Typer(help="Recruiting checklist")
profile_app = typer.Typer(help="Athlete profile")
schools_app = typer.Typer(help="Target school list")
outreach_app = typer.Typer(help="Outreach log")
media_app = typer.Typer(help="Highlight reel planner")
bot_app = typer.Typer(help="Recruiting assistant")
settings_app = typer.Typer(help="Brand and bot names")

app.add_typer(playbook_app, name="playbook")
app.add_typer(profile_app, name="profile")
app.add_typer(schools_app, name="schools")
app.add_typer(outreach_app, name="outreach")
app.add_typer(media_app, name="media")
app.add_typer(bot_app, name="bot")
app.add_typer(settings_app, name="settings")


@app.callback()
def main(
    ctx: typer.Context,
    store_path: Path = typer.Option(
        config.STORE_PATH, "--store", "-s", help="Store file (json or sqlite backend)"
    ),
    backend: str = typer.Option(
        config.STORE_BACKEND, "--backend", "-b", help="Store backend: json, sqlite, or memory"
    ),
    log_dir: Optional[Path] = typer.Option(
        config.LOGS_PATH, "--log-dir", help="Write a detailed session log to this directory"
    ),
):
    """Open the tracker store, or show help when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    if log_dir:
        setup_logger(
            context_name="cli",
            log_dir=Path(log_dir),
            extra_provenance={"Store backend": backend, "Store path": store_path},
        )
    else:
        setup_console_logger()

    try:
        persistence = open_store(backend, store_path)
    except ValueError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except PersistenceUnavailableError as e:
        typer.secho(
            f"Store unavailable, changes will not be saved: {e.message}",
            fg=typer.colors.YELLOW,
            err=True,
        )
        persistence = open_store("memory")

    ctx.obj = EntityStore(persistence)
    ctx.call_on_close(persistence.close)


def _store(ctx: typer.Context) -> EntityStore:
    return ctx.obj


# =============================================================================
# PLAYBOOK
# =============================================================================


@playbook_app.command("show")
def playbook_show(ctx: typer.Context):
    """Show the recruiting checklist."""
    store = _store(ctx)
    typer.secho(f"\n{store.brand_name} Playbook", fg=typer.colors.BLUE, bold=True)
    for number, (step, done) in enumerate(store.playbook, start=1):
        mark = "[x]" if done else "[ ]"
        typer.echo(f"  {number}. {mark} {step}")


@playbook_app.command("toggle")
def playbook_toggle(
    ctx: typer.Context,
    step: int = typer.Argument(..., help="Step number as shown by 'playbook show'"),
):
    """Mark a checklist step done (or not done)."""
    store = _store(ctx)
    if not store.toggle_playbook_step(step - 1):
        typer.secho(
            f"No step {step} (choose 1-{len(store.playbook_steps)})", fg=typer.colors.RED, err=True
        )
        raise typer.Exit(code=1)
    name, done = store.playbook[step - 1]
    typer.secho(f"✓ {name}: {'done' if done else 'not done'}", fg=typer.colors.GREEN)


# =============================================================================
# PROFILE
# =============================================================================


@profile_app.command("show")
def profile_show(ctx: typer.Context):
    """Show the athlete profile and its completion."""
    store = _store(ctx)
    profile = store.profile

    typer.secho(
        f"\nAthlete Profile ({store.profile_completion}% complete)", fg=typer.colors.BLUE, bold=True
    )
    for attr in PROFILE_FIELDS:
        value = getattr(profile, attr)
        typer.echo(f"  {attr:<12} {value if value else '-'}")

    typer.echo("\nAchievements:")
    if not profile.achievements:
        typer.echo("  (none)")
    for achievement in profile.achievements:
        typer.echo(f"  [{achievement.id}] {achievement.text}")


@profile_app.command("set")
def profile_set(
    ctx: typer.Context,
    field_name: str = typer.Argument(..., help=f"One of: {', '.join(PROFILE_FIELDS)}"),
    value: str = typer.Argument(..., help="New value (free text)"),
):
    """Set one profile field."""
    store = _store(ctx)
    try:
        store.update_profile_field(field_name, value)
    except ValueError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ {field_name} updated ({store.profile_completion}% complete)", fg=typer.colors.GREEN)


@profile_app.command("add-achievement")
def profile_add_achievement(ctx: typer.Context, text: str = typer.Argument(...)):
    """Add an achievement to the profile."""
    achievement = _store(ctx).add_achievement(text)
    if achievement is None:
        typer.secho("Nothing to add (empty achievement)", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ Added achievement {achievement.id}", fg=typer.colors.GREEN)


@profile_app.command("remove-achievement")
def profile_remove_achievement(ctx: typer.Context, achievement_id: int = typer.Argument(...)):
    """Remove an achievement by id."""
    if not _store(ctx).remove_achievement(achievement_id):
        typer.secho(f"No achievement with id {achievement_id}", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ Removed achievement {achievement_id}", fg=typer.colors.GREEN)


@profile_app.command("export")
def profile_export(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write to this file instead of stdout"
    ),
):
    """
    Export the profile as JSON.

    Examples:\n

        $ redzone profile export                    # Print to stdout

        $ redzone profile export -o profile.json    # Save to file
    """
    payload = _store(ctx).export_profile()
    if output is None:
        typer.echo(payload)
        return
    try:
        output.write_text(payload + "\n", encoding="utf-8")
    except OSError as e:
        typer.secho(f"✗ Could not write {output}", fg=typer.colors.RED, err=True)
        typer.echo(f"  {e}", err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ Profile exported to {output}", fg=typer.colors.GREEN)


@profile_app.command("import")
def profile_import(
    ctx: typer.Context,
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Profile JSON file"),
):
    """Replace the profile with one from a JSON file."""
    try:
        raw = source.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as e:
        typer.secho("✗ Invalid profile JSON", fg=typer.colors.RED, err=True)
        typer.echo(f"  {e}", err=True)
        raise typer.Exit(code=1)

    try:
        profile = _store(ctx).import_profile(raw)
    except ProfileImportError as e:
        typer.secho(f"✗ {e.message}", fg=typer.colors.RED, err=True)
        if e.original_error:
            typer.echo(f"  {e.original_error}", err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ Imported profile for {profile.name or '(unnamed)'}", fg=typer.colors.GREEN)


# =============================================================================
# SCHOOLS
# =============================================================================


@schools_app.command("add")
def schools_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="School name"),
    division: Division = typer.Option(Division.NCAA_DI, "--division", "-d"),
    contact: str = typer.Option("", "--contact", "-c", help="Coach contact email"),
):
    """Add a school; its fit score is taken from your current GPA."""
    school = _store(ctx).add_school(name, division, contact)
    if school is None:
        typer.secho("Nothing to add (empty school name)", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    typer.secho(
        f"✓ Added {school.name} [{school.id}] (fit score {school.fit_score})", fg=typer.colors.GREEN
    )


@schools_app.command("list")
def schools_list(ctx: typer.Context):
    """List target schools."""
    schools = _store(ctx).schools
    if not schools:
        typer.echo("No schools yet. Add one with 'redzone schools add'.")
        return

    typer.secho(f"\n{'ID':<15} {'Name':<30} {'Division':<15} {'Fit':>3}  Contact", bold=True)
    for school in schools:
        typer.echo(
            f"{school.id:<15} {school.name:<30} {school.division.value:<15} "
            f"{school.fit_score:>3}  {school.contact}"
        )


@schools_app.command("remove")
def schools_remove(ctx: typer.Context, school_id: int = typer.Argument(...)):
    """Remove a school and its outreach history."""
    if not _store(ctx).remove_school(school_id):
        typer.secho(f"No school with id {school_id}", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ Removed school {school_id}", fg=typer.colors.GREEN)


# =============================================================================
# OUTREACH
# =============================================================================


@outreach_app.command("log")
def outreach_log(
    ctx: typer.Context,
    school_id: int = typer.Argument(..., help="School id from 'redzone schools list'"),
    message: str = typer.Argument(...),
):
    """Log a message sent to a school's coaching staff."""
    store = _store(ctx)
    if store.school_by_id(school_id) is None:
        typer.secho(f"No school with id {school_id}", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    entry = store.log_outreach(school_id, message)
    if entry is None:
        typer.secho("Nothing to log (empty message)", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ Logged outreach to {store.school_name_for(entry)} on {entry.date}", fg=typer.colors.GREEN)


@outreach_app.command("list")
def outreach_list(ctx: typer.Context):
    """Show the outreach log."""
    store = _store(ctx)
    if not store.outreach:
        typer.echo("No outreach logged yet.")
        return

    typer.secho(f"\n{'Date':<11} {'School':<30} Message", bold=True)
    for entry in store.outreach:
        typer.echo(f"{entry.date:<11} {store.school_name_for(entry):<30} {entry.message}")


# =============================================================================
# MEDIA
# =============================================================================


@media_app.command("show")
def media_show(ctx: typer.Context):
    """Show the highlight reel plan and guidance."""
    store = _store(ctx)
    typer.secho("\nHighlight Reel Planner", fg=typer.colors.BLUE, bold=True)
    typer.echo(store.reel_plan or "(no plan yet)")
    typer.echo("")
    typer.echo(config.load_defaults()["reel_guidance"])


@media_app.command("set")
def media_set(ctx: typer.Context, plan: str = typer.Argument(...)):
    """Replace the highlight reel plan."""
    _store(ctx).set_reel_plan(plan)
    typer.secho("✓ Reel plan saved", fg=typer.colors.GREEN)


# =============================================================================
# BOT
# =============================================================================


@bot_app.command("ask")
def bot_ask(ctx: typer.Context, question: str = typer.Argument(...)):
    """Ask the recruiting assistant a question."""
    store = _store(ctx)
    exchange = store.send_to_bot(question)
    if exchange is None:
        typer.secho("Ask the bot a question about recruiting.", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    _, reply = exchange
    typer.secho(f"{store.bot_name}: ", fg=typer.colors.BLUE, bold=True, nl=False)
    typer.echo(reply.text)


@bot_app.command("history")
def bot_history(ctx: typer.Context):
    """Show the conversation with the assistant."""
    store = _store(ctx)
    if not store.chat_messages:
        typer.echo("Start the conversation by asking a question about recruiting.")
        return
    for message in store.chat_messages:
        if message.sender is Sender.USER:
            typer.secho("You: ", fg=typer.colors.GREEN, bold=True, nl=False)
        else:
            typer.secho(f"{store.bot_name}: ", fg=typer.colors.BLUE, bold=True, nl=False)
        typer.echo(message.text)


# =============================================================================
# RESOURCES AND SETTINGS
# =============================================================================


@app.command("resources")
def resources():
    """List useful recruiting resources."""
    typer.secho("\nUseful Resources", fg=typer.colors.BLUE, bold=True)
    for resource in config.load_defaults()["resources"]:
        typer.echo(f"  • {resource['title']}: {resource['url']}")


@settings_app.command("show")
def settings_show(ctx: typer.Context):
    """Show current settings."""
    store = _store(ctx)
    typer.echo(f"Brand name: {store.brand_name}")
    typer.echo(f"Bot name:   {store.bot_name}")


@settings_app.command("brand")
def settings_brand(ctx: typer.Context, name: str = typer.Argument(...)):
    """Set the brand name shown in headers."""
    _store(ctx).set_brand_name(name)
    typer.secho(f"✓ Brand name set to {name}", fg=typer.colors.GREEN)


@settings_app.command("bot-name")
def settings_bot_name(ctx: typer.Context, name: str = typer.Argument(...)):
    """Set the assistant's name."""
    _store(ctx).set_bot_name(name)
    typer.secho(f"✓ Bot name set to {name}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
