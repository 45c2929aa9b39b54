"""albumscan CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from sqlmodel import Session

from albumscan.config import DATA_DIR, DEFAULT_CONFIG_PATH, AlbumscanConfig, load_config, write_default_config
from albumscan.database import get_engine, init_db, reset_database
from albumscan.logging_config import log_notification, setup_logging
from albumscan.migrations import current_revision, head_revision, upgrade_database
from albumscan.notifications import Notifier
from albumscan.repository import AlbumRepository, UserRepository
from albumscan.scanner_cache import AlbumScannerCache
from albumscan.user_scan import scan_user


__version__ = "0.1.0"

app = typer.Typer(add_completion=False, help="albumscan photo album scanner CLI")


def _ensure_config() -> AlbumscanConfig:
    try:
        return load_config()
    except FileNotFoundError:
        typer.echo("[ERROR] config.ini not found. Run: albumscan init")
        raise typer.Exit(code=1)


@app.command()
def init(
    cache_root: str = typer.Option("./photo_cache", "--cache-root", help="Directory holding per-album caches"),
) -> None:
    """Initialize config.ini and the database."""
    path = write_default_config(DEFAULT_CONFIG_PATH, cache_root=cache_root)
    init_db()
    typer.echo(f"[OK] Config created at {path}")


@app.command("add-user")
def add_user(
    name: str = typer.Option(..., "--name", help="Username"),
    root: Path = typer.Option(..., "--root", help="Root folder of the user's photos"),
) -> None:
    """Register a user and their photo root."""
    _ensure_config()
    init_db()

    with Session(get_engine()) as session:
        repo = UserRepository(session)
        if repo.get_user_by_name(name):
            typer.echo(f"[ERROR] User '{name}' already exists")
            raise typer.Exit(code=1)
        user = repo.add_user(name, root.expanduser().absolute())

    typer.echo(f"[OK] Added user {user.username} ({user.root_path})")


@app.command()
def users() -> None:
    """List registered users."""
    _ensure_config()
    init_db()

    with Session(get_engine()) as session:
        for user in UserRepository(session).get_all_users():
            typer.echo(f"  {user.id:>4}  {user.username}  {user.root_path}")


@app.command()
def scan(
    user: Optional[str] = typer.Option(None, "--user", help="Scan only this user"),
) -> None:
    """Scan photo roots and sync albums to the database."""
    setup_logging(DATA_DIR)

    config = _ensure_config()
    init_db()

    with Session(get_engine()) as session:
        repo = UserRepository(session)
        if user:
            found = repo.get_user_by_name(user)
            if found is None:
                typer.echo(f"[ERROR] Unknown user '{user}'")
                raise typer.Exit(code=1)
            targets = [found]
        else:
            targets = repo.get_all_users()
        for target in targets:
            session.expunge(target)

    cache = AlbumScannerCache()
    notifier = Notifier()
    notifier.subscribe(log_notification)

    failed = False
    for target in targets:
        result = scan_user(target, cache, config, notifier=notifier)
        failed = failed or result.failed
        typer.echo(
            f"✓ {target.username}: {len(result.albums)} albums "
            f"({result.added} new), {len(result.errors)} errors."
        )

    if failed:
        raise typer.Exit(code=1)


@app.command()
def albums(
    user: str = typer.Option(..., "--user", help="Owner of the albums"),
) -> None:
    """List a user's albums."""
    _ensure_config()
    init_db()

    with Session(get_engine()) as session:
        owner = UserRepository(session).get_user_by_name(user)
        if owner is None:
            typer.echo(f"[ERROR] Unknown user '{user}'")
            raise typer.Exit(code=1)
        records = AlbumRepository(session).get_albums_for_owner(owner.id)

    for album in records:
        parent = album.parent_album_id if album.parent_album_id is not None else "-"
        typer.echo(f"  {album.id:>5}  parent={parent}  {album.title}  {album.path}")


@app.command()
def migrate(
    check: bool = typer.Option(False, "--check", help="Print status and exit (1 if not at head)"),
) -> None:
    """Upgrade the album database schema (or check status with --check)."""
    setup_logging(DATA_DIR)
    _ensure_config()
    init_db()
    engine = get_engine()

    if check:
        current, head = current_revision(engine), head_revision()
        if current == head:
            typer.echo(f"[OK] Database at {head} (head).")
            raise typer.Exit(code=0)
        typer.echo(f"[WARN] Database behind, current: {current}, head: {head}")
        raise typer.Exit(code=1)

    head = upgrade_database(engine, backup=True)
    typer.echo(f"[OK] Database at {head} (head).")


@app.command()
def reset(
    confirm: bool = typer.Option(False, "--confirm", help="Confirm destructive reset"),
) -> None:
    """Delete the database (users and albums) and recreate an empty one."""
    if not confirm:
        typer.echo("[ERROR] This will delete your database. Use --confirm.")
        raise typer.Exit(code=1)

    _ensure_config()
    reset_database()
    typer.echo("[INFO] Database reset.")


if __name__ == "__main__":
    app()
