"""SQLModel database models for albumscan."""

from typing import List, Optional

from pydantic import BaseModel
from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel


class User(SQLModel, table=True):
    __tablename__ = "users"
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)
    root_path: str

    albums: List["Album"] = Relationship(back_populates="owner")


class AlbumBase(SQLModel):
    title: str
    path: str = Field(index=True)
    owner_id: int = Field(foreign_key="users.id", ondelete="CASCADE")
    parent_album_id: Optional[int] = Field(
        default=None, foreign_key="albums.id", ondelete="CASCADE"
    )


class Album(AlbumBase, table=True):
    __tablename__ = "albums"
    __table_args__ = (UniqueConstraint("owner_id", "path", name="uq_albums_owner_path"),)

    id: Optional[int] = Field(default=None, primary_key=True)

    owner: Optional[User] = Relationship(back_populates="albums")


class AlbumRecord(BaseModel):
    """Album row decoded at the storage boundary, detached from any session."""

    model_config = {"extra": "forbid", "frozen": True}

    id: int
    title: str
    parent_album_id: Optional[int] = None
    owner_id: int
    path: str
