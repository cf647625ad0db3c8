"""mytime CLI - fill your free time with your interests."""

import json
import logging
import sys
from datetime import date, datetime, timedelta

import click

from .adapters.json_store import JsonScheduleStore
from .config import Config, load_config, parse_hours
from .core.interests import Interest, TimeOfDay
from .core.tasks import Task
from .store import ScheduleError, ScheduleStore, fixed_tasks_between


def get_store(config: Config) -> ScheduleStore:
    """Build the schedule store described by config."""
    tz = config.tzinfo()
    return ScheduleStore(
        JsonScheduleStore(config.data_path()),
        default_profile=config.default_profile(),
        horizon_days=config.suggestion_days,
        skip_occupied_days=config.skip_occupied_days,
        tz=tz,
        today=lambda: datetime.now(tz).date(),
    )


def _parse_start(value: str, config: Config) -> datetime:
    """Parse a task start; naive input is read in the configured timezone."""
    start = datetime.fromisoformat(value)
    tz = config.tzinfo()
    if tz is not None and start.tzinfo is None:
        start = start.replace(tzinfo=tz)
    return start


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _task_json(task: Task) -> dict:
    return {
        "id": task.id,
        "name": task.name,
        "start": task.start.isoformat(),
        "end": task.end.isoformat(),
        "location": task.location,
        "completed": task.is_completed,
        "suggested": task.is_suggested,
    }


def _show_day(day: date, tasks: list[Task]) -> None:
    click.echo(f"### {day.strftime('%A, %B %d')}")
    if not tasks:
        click.echo("  Nothing planned.")
        return
    for task in tasks:
        marker = "~" if task.is_suggested else ("x" if task.is_completed else " ")
        loc = f" @ {task.location}" if task.location else ""
        click.echo(f"  [{marker}] {task.format_time()} {task.name}{loc}")


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """mytime - plan your free time around your interests."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    ctx.obj = load_config()


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Date to view (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def day(config: Config, target_date: str | None, as_json: bool):
    """Show a day's tasks and suggestions."""
    target = date.fromisoformat(target_date) if target_date else datetime.now(config.tzinfo()).date()
    store = get_store(config)
    store.refresh([target])
    tasks = store.tasks_on(target)

    if as_json:
        click.echo(json.dumps([_task_json(t) for t in tasks], indent=2))
    else:
        _show_day(target, tasks)


@main.command()
@click.option("--days", "-n", type=int, default=None, help="Number of days, starting today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def suggest(config: Config, days: int | None, as_json: bool):
    """Recompute suggestions for the coming days."""
    store = get_store(config)
    if days is not None:
        store.horizon_days = max(1, days)
    refreshed = store.refresh()

    if as_json:
        click.echo(
            json.dumps(
                {d.isoformat(): [_task_json(t) for t in tasks] for d, tasks in refreshed.items()},
                indent=2,
            )
        )
        return

    if not refreshed:
        click.echo("Every day in range already has plans; nothing recomputed.")
        return
    for i, (d, tasks) in enumerate(refreshed.items()):
        if i:
            click.echo()
        _show_day(d, tasks)


# ============== Tasks ==============


@main.group()
def task():
    """Manage fixed tasks."""
    pass


@task.command("add")
@click.argument("name")
@click.option("--start", "-s", required=True, help="Start time (YYYY-MM-DD HH:MM)")
@click.option("--duration", "-m", type=int, required=True, help="Duration in minutes")
@click.option("--description", default="", help="Free-form notes")
@click.option("--location", default="", help="Where it happens")
@click.pass_obj
def task_add(config: Config, name: str, start: str, duration: int, description: str, location: str):
    """Add a fixed task."""
    store = get_store(config)
    try:
        new_task = store.add_task(
            Task(
                name=name,
                start=_parse_start(start, config),
                duration=timedelta(minutes=duration),
                description=description,
                location=location,
            )
        )
    except (ScheduleError, ValueError) as e:
        _fail(str(e))
        return
    click.echo(f"Added {new_task.name} ({new_task.id})")


@task.command("list")
@click.option("--days", "-n", type=int, default=7, help="Number of days, starting today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def task_list(config: Config, days: int, as_json: bool):
    """List upcoming fixed tasks."""
    store = get_store(config)
    tasks = fixed_tasks_between(store.tasks, datetime.now(config.tzinfo()).date(), days)

    if as_json:
        click.echo(json.dumps([_task_json(t) for t in tasks], indent=2))
        return

    if not tasks:
        click.echo("No upcoming tasks.")
        return
    for t in tasks:
        done = "x" if t.is_completed else " "
        click.echo(f"[{done}] {t.start.strftime('%Y-%m-%d')} {t.format_time()} {t.name}  ({t.id})")


@task.command("remove")
@click.argument("task_id")
@click.pass_obj
def task_remove(config: Config, task_id: str):
    """Remove a task by id."""
    store = get_store(config)
    try:
        removed = store.remove_task(task_id)
    except ScheduleError as e:
        _fail(str(e))
        return
    click.echo(f"Removed {removed.name}")


@task.command("done")
@click.argument("task_id")
@click.pass_obj
def task_done(config: Config, task_id: str):
    """Mark a task as completed."""
    store = get_store(config)
    try:
        completed = store.complete_task(task_id)
    except ScheduleError as e:
        _fail(str(e))
        return
    click.echo(f"Completed {completed.name}")


# ============== Interests ==============


@main.group()
def interest():
    """Manage interests."""
    pass


@interest.command("add")
@click.argument("name")
@click.option("--duration", "-m", type=int, required=True, help="Preferred duration in minutes")
@click.option("--preference", "-p", type=click.IntRange(1, 5), default=3, help="Preference level 1-5")
@click.option("--time-of-day", "-t", "time_of_day",
              type=click.Choice([t.value for t in TimeOfDay], case_sensitive=False),
              default=TimeOfDay.ANY.value, help="When it may be suggested")
@click.pass_obj
def interest_add(config: Config, name: str, duration: int, preference: int, time_of_day: str):
    """Add an interest."""
    store = get_store(config)
    try:
        new_interest = store.add_interest(
            Interest(
                name=name,
                preferred_duration=timedelta(minutes=duration),
                preference_level=preference,
                time_of_day=TimeOfDay.parse(time_of_day),
            )
        )
    except ValueError as e:
        _fail(str(e))
        return
    click.echo(f"Added {new_interest.name} ({new_interest.id})")


@interest.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def interest_list(config: Config, as_json: bool):
    """List interests in their original order."""
    interests = get_store(config).interests

    if as_json:
        click.echo(json.dumps([i.to_dict() for i in interests], indent=2))
        return

    if not interests:
        click.echo("No interests yet.")
        return
    for i in interests:
        click.echo(
            f"{'*' * i.preference_level:5} {i.name} ({i.duration_minutes()} min, "
            f"{i.time_of_day.value})  ({i.id})"
        )


@interest.command("remove")
@click.argument("interest_id")
@click.pass_obj
def interest_remove(config: Config, interest_id: str):
    """Remove an interest by id."""
    store = get_store(config)
    try:
        removed = store.remove_interest(interest_id)
    except ScheduleError as e:
        _fail(str(e))
        return
    click.echo(f"Removed {removed.name}")


# ============== Profile ==============


@main.group()
def profile():
    """Show or edit sleep and work hours."""
    pass


@profile.command("show")
@click.pass_obj
def profile_show(config: Config):
    """Show the profile."""
    p = get_store(config).profile
    if p.nickname:
        click.echo(f"Nickname: {p.nickname}")
    click.echo(f"Sleep: {p.sleep_start.strftime('%H:%M')}-{p.sleep_end.strftime('%H:%M')}")
    click.echo(f"Work:  {p.work_start.strftime('%H:%M')}-{p.work_end.strftime('%H:%M')}")
    click.echo(f"Completed tasks: {p.completed_tasks} ({p.total_hours:.1f} h)")


@profile.command("set")
@click.option("--sleep", default=None, help="Sleep hours (HH:MM-HH:MM)")
@click.option("--work", default=None, help="Work hours (HH:MM-HH:MM)")
@click.option("--nickname", default=None, help="Display name")
@click.pass_obj
def profile_set(config: Config, sleep: str | None, work: str | None, nickname: str | None):
    """Edit the profile; suggestions are recomputed."""
    try:
        sleep_start, sleep_end = parse_hours(sleep) if sleep else (None, None)
        work_start, work_end = parse_hours(work) if work else (None, None)
    except ValueError as e:
        _fail(str(e))
        return

    store = get_store(config)
    store.update_profile(
        sleep_start=sleep_start,
        sleep_end=sleep_end,
        work_start=work_start,
        work_end=work_end,
        nickname=nickname,
    )
    click.echo("Profile updated.")


if __name__ == "__main__":
    main()
