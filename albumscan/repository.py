"""Data Access Layer for albumscan.

Encapsulates database operations using SQLModel/SQLAlchemy. Album rows leave
this module as ``AlbumRecord`` values, never as session-bound ORM objects.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from pydantic import ValidationError
from sqlalchemy import delete
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import Session, col, select

from .errors import RowDecodeError
from .models import Album, AlbumRecord, User

_ALBUM_COLUMNS = (
    ("id", Album.id),
    ("title", Album.title),
    ("parent_album_id", Album.parent_album_id),
    ("owner_id", Album.owner_id),
    ("path", Album.path),
)


def _album_from_row(row) -> AlbumRecord:
    """Map a (id, title, parent_album_id, owner_id, path) row onto an AlbumRecord."""
    try:
        values = tuple(row)
    except TypeError as exc:
        raise RowDecodeError(f"album row is not a sequence: {row!r}") from exc

    if len(values) != len(_ALBUM_COLUMNS):
        raise RowDecodeError(
            f"album row has {len(values)} columns, expected {len(_ALBUM_COLUMNS)}"
        )

    fields = {name: value for (name, _), value in zip(_ALBUM_COLUMNS, values)}
    try:
        return AlbumRecord.model_validate(fields, strict=True)
    except ValidationError as exc:
        raise RowDecodeError(f"invalid album row {fields!r}: {exc}") from exc


class AlbumRepository:
    """Album queries for a single session. Callers control when to commit."""

    def __init__(self, session: Session):
        self.session = session

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def insert_album_ignore(
        self,
        *,
        title: str,
        parent_album_id: Optional[int],
        owner_id: int,
        path: Path,
    ) -> bool:
        """Insert an album unless (owner_id, path) already exists.

        Returns True when a new row was written.
        """
        statement = (
            sqlite_insert(Album)
            .values(
                title=title,
                parent_album_id=parent_album_id,
                owner_id=owner_id,
                path=str(path),
            )
            .on_conflict_do_nothing(index_elements=["owner_id", "path"])
        )
        result = self.session.exec(statement)
        return result.rowcount > 0

    def get_album_by_path(self, owner_id: int, path: Path) -> Optional[AlbumRecord]:
        statement = select(*(column for _, column in _ALBUM_COLUMNS)).where(
            Album.owner_id == owner_id, Album.path == str(path)
        )
        row = self.session.exec(statement).first()
        if row is None:
            return None
        return _album_from_row(row)

    def get_albums_for_owner(self, owner_id: int) -> List[AlbumRecord]:
        statement = (
            select(*(column for _, column in _ALBUM_COLUMNS))
            .where(Album.owner_id == owner_id)
            .order_by(Album.path)
        )
        return [_album_from_row(row) for row in self.session.exec(statement).all()]

    def find_stale_album_ids(self, owner_id: int, scanned_paths: Iterable[str]) -> List[int]:
        """Return ids of the owner's albums whose path is not in scanned_paths."""
        paths = sorted(set(scanned_paths))
        statement = select(Album.id).where(
            Album.owner_id == owner_id, col(Album.path).not_in(paths)
        )
        ids = []
        for album_id in self.session.exec(statement).all():
            if not isinstance(album_id, int):
                raise RowDecodeError(f"album id is not an integer: {album_id!r}")
            ids.append(album_id)
        return ids

    def delete_albums(self, album_ids: Sequence[int]) -> int:
        """Delete albums by id in a single statement. Returns the row count."""
        if not album_ids:
            return 0
        result = self.session.exec(delete(Album).where(col(Album.id).in_(list(album_ids))))
        return result.rowcount


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def add_user(self, username: str, root_path: Path) -> User:
        user = User(username=username, root_path=str(root_path))
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def get_user_by_name(self, username: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.username == username)).first()

    def get_all_users(self) -> List[User]:
        return list(self.session.exec(select(User).order_by(User.username)).all())
