"""Flask CLI commands for HabitVault."""

from __future__ import annotations

import click
from flask import Flask


def init_app(app: Flask) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("habitvault-seed")
    @click.option("--demo", is_flag=True, default=False, help="Create the demo user and habits")
    def habitvault_seed(demo: bool) -> None:
        """Seed application data (demo)."""

        if not demo:
            click.echo("No action specified. Use --demo to seed demo data.")
            return

        from .extensions import get_session_factory
        from .services.demo_seed import DEMO_EMAIL, DEMO_PASSWORD, seed_demo_data

        click.echo("Seeding demo data...")
        seed_demo_data(get_session_factory())
        click.echo(f"Demo user ready: {DEMO_EMAIL} / {DEMO_PASSWORD}")

    @app.cli.command("habitvault-metrics")
    @click.option("--email", required=True, help="Account whose habits to report")
    @click.option("--today", default=None, help="Evaluation date (YYYY-MM-DD), default today")
    def habitvault_metrics(email: str, today: str | None) -> None:
        """Print streaks and completion rate for each of a user's habits."""

        from datetime import date

        from .domain.dates import parse_iso_date
        from .errors import HabitVaultError
        from .extensions import get_session_factory
        from .services import auth
        from .services.habits import HabitTracker

        session_factory = get_session_factory()
        user = auth.get_user_by_email(email, session_factory)
        if user is None:
            raise click.ClickException(f"No user with email {email}")
        try:
            day = parse_iso_date(today) if today else date.today()
        except HabitVaultError as exc:
            raise click.BadParameter(str(exc), param_hint="--today") from exc

        tracker = HabitTracker(session_factory, user.id, today_provider=lambda: day)
        snapshots = tracker.list_habits()
        if not snapshots:
            click.echo("No habits yet.")
            return
        click.echo(f"{'Habit':<30} {'Current':>7} {'Longest':>7} {'Rate':>5}")
        for snap in snapshots:
            m = snap.metrics
            click.echo(
                f"{snap.definition.name[:30]:<30} {m.current_streak:>7} "
                f"{m.longest_streak:>7} {m.completion_rate:>4}%"
            )
