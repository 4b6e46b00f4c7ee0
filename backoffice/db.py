"""
Content store abstraction for Postgres and an in-memory test implementation.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Protocol

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    create_engine,
    func,
    select,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool


class ContentKind(str, Enum):
    AUTHORS = "authors"
    BLOGS = "blogs"
    TEAM = "team"
    GALLERY_IMAGES = "gallery-images"
    GALLERY_VIDEOS = "gallery-videos"
    TESTIMONIALS = "testimonials"


class ContentStore(Protocol):
    """Interface for the canonical content database."""

    def list_by_created_desc(self, kind: ContentKind) -> list["Record"]:
        ...

    def get(self, kind: ContentKind, entity_id: int) -> Optional["Record"]:
        ...

    def get_many(self, kind: ContentKind, ids: Iterable[int]) -> list["Record"]:
        ...

    def create(self, kind: ContentKind, values: dict) -> "Record":
        ...

    def update(
        self, kind: ContentKind, entity_id: int, values: dict
    ) -> Optional["Record"]:
        ...

    def delete(self, kind: ContentKind, entity_id: int) -> bool:
        ...

    def delete_many(self, kind: ContentKind, ids: Iterable[int]) -> int:
        ...

    def count(self, kind: ContentKind) -> int:
        ...


@dataclass
class AuthorRecord:
    id: int
    created_at: float
    name: str
    avatar_url: str
    email: Optional[str] = None

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class BlogRecord:
    id: int
    created_at: float
    title: str
    content: str
    author_id: int
    description: Optional[str] = None
    featured_image_url: Optional[str] = None
    is_published: bool = False
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    keywords: Optional[list] = None
    updated_at: Optional[float] = None

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class TeamMemberRecord:
    id: int
    created_at: float
    name: str
    title: str
    bio: str
    image_url: str
    slug: str

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class GalleryImageRecord:
    id: int
    created_at: float
    image_url: str
    alt: str = ""

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class GalleryVideoRecord:
    id: int
    created_at: float
    video_url: str
    alt: str = ""
    thumbnail_url: Optional[str] = None

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class TestimonialRecord:
    id: int
    created_at: float
    name: str
    address: str
    company: str
    content: str
    rating: float

    def as_dict(self) -> dict:
        return asdict(self)


Record = Any

RECORD_TYPES: Dict[ContentKind, type] = {
    ContentKind.AUTHORS: AuthorRecord,
    ContentKind.BLOGS: BlogRecord,
    ContentKind.TEAM: TeamMemberRecord,
    ContentKind.GALLERY_IMAGES: GalleryImageRecord,
    ContentKind.GALLERY_VIDEOS: GalleryVideoRecord,
    ContentKind.TESTIMONIALS: TestimonialRecord,
}


def _sort_key(record) -> tuple[float, int]:
    return (record.created_at, record.id)


@dataclass
class InMemoryContentStore:
    """Simple in-memory database for development and tests."""

    tables: Dict[ContentKind, Dict[int, Record]] = field(default_factory=dict)
    next_ids: Dict[ContentKind, int] = field(default_factory=dict)

    def _table(self, kind: ContentKind) -> Dict[int, Record]:
        return self.tables.setdefault(ContentKind(kind), {})

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.tables.clear()
        self.next_ids.clear()

    def list_by_created_desc(self, kind: ContentKind) -> list[Record]:
        records = sorted(self._table(kind).values(), key=_sort_key, reverse=True)
        return [replace(r) for r in records]

    def get(self, kind: ContentKind, entity_id: int) -> Optional[Record]:
        record = self._table(kind).get(entity_id)
        return replace(record) if record else None

    def get_many(self, kind: ContentKind, ids: Iterable[int]) -> list[Record]:
        table = self._table(kind)
        return [replace(table[i]) for i in dict.fromkeys(ids) if i in table]

    def create(self, kind: ContentKind, values: dict) -> Record:
        kind = ContentKind(kind)
        entity_id = self.next_ids.get(kind, 0) + 1
        self.next_ids[kind] = entity_id
        record = RECORD_TYPES[kind](id=entity_id, created_at=time.time(), **values)
        self._table(kind)[entity_id] = record
        return replace(record)

    def update(
        self, kind: ContentKind, entity_id: int, values: dict
    ) -> Optional[Record]:
        record = self._table(kind).get(entity_id)
        if not record:
            return None
        for key, value in values.items():
            setattr(record, key, value)
        return replace(record)

    def delete(self, kind: ContentKind, entity_id: int) -> bool:
        return self._table(kind).pop(entity_id, None) is not None

    def delete_many(self, kind: ContentKind, ids: Iterable[int]) -> int:
        table = self._table(kind)
        return sum(1 for i in set(ids) if table.pop(i, None) is not None)

    def count(self, kind: ContentKind) -> int:
        return len(self._table(kind))


class SqlContentStore:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlContentStore")
        if database_url.startswith("sqlite") and ":memory:" in database_url:
            # One shared connection, otherwise every session sees an empty DB.
            self.engine = create_engine(
                database_url,
                future=True,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                database_url,
                future=True,
                pool_pre_ping=True,
                pool_recycle=1800,
            )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_record(self, kind: ContentKind, row) -> Record:
        record_cls = RECORD_TYPES[kind]
        return record_cls(**{f.name: getattr(row, f.name) for f in fields(record_cls)})

    def list_by_created_desc(self, kind: ContentKind) -> list[Record]:
        row_cls = ROW_TYPES[kind]
        with self.Session() as session:
            stmt = select(row_cls).order_by(
                row_cls.created_at.desc(), row_cls.id.desc()
            )
            rows = session.execute(stmt).scalars().all()
            return [self._to_record(kind, row) for row in rows]

    def get(self, kind: ContentKind, entity_id: int) -> Optional[Record]:
        with self.Session() as session:
            row = session.get(ROW_TYPES[kind], entity_id)
            if not row:
                return None
            return self._to_record(kind, row)

    def get_many(self, kind: ContentKind, ids: Iterable[int]) -> list[Record]:
        ids = list(dict.fromkeys(ids))
        if not ids:
            return []
        row_cls = ROW_TYPES[kind]
        with self.Session() as session:
            rows = session.execute(
                select(row_cls).where(row_cls.id.in_(ids))
            ).scalars().all()
            by_id = {row.id: self._to_record(kind, row) for row in rows}
            return [by_id[i] for i in ids if i in by_id]

    def create(self, kind: ContentKind, values: dict) -> Record:
        with self.Session() as session:
            row = ROW_TYPES[kind](created_at=time.time(), **values)
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._to_record(kind, row)

    def update(
        self, kind: ContentKind, entity_id: int, values: dict
    ) -> Optional[Record]:
        with self.Session() as session:
            row = session.get(ROW_TYPES[kind], entity_id)
            if not row:
                return None
            for key, value in values.items():
                setattr(row, key, value)
            session.commit()
            session.refresh(row)
            return self._to_record(kind, row)

    def delete(self, kind: ContentKind, entity_id: int) -> bool:
        with self.Session() as session:
            row = session.get(ROW_TYPES[kind], entity_id)
            if not row:
                return False
            session.delete(row)
            session.commit()
            return True

    def delete_many(self, kind: ContentKind, ids: Iterable[int]) -> int:
        ids = list(set(ids))
        if not ids:
            return 0
        row_cls = ROW_TYPES[kind]
        with self.Session() as session:
            deleted = (
                session.query(row_cls)
                .filter(row_cls.id.in_(ids))
                .delete(synchronize_session=False)
            )
            session.commit()
            return deleted or 0

    def count(self, kind: ContentKind) -> int:
        row_cls = ROW_TYPES[kind]
        with self.Session() as session:
            return session.execute(
                select(func.count()).select_from(row_cls)
            ).scalar_one()


Base = declarative_base()


class AuthorRow(Base):
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(Float, nullable=False, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    avatar_url = Column(String, nullable=False)


class BlogRow(Base):
    __tablename__ = "blogs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(Float, nullable=False, index=True)
    updated_at = Column(Float, nullable=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    content = Column(Text, nullable=False)
    featured_image_url = Column(String, nullable=True)
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=False, index=True)
    is_published = Column(Boolean, nullable=False, default=False)
    seo_title = Column(String, nullable=True)
    seo_description = Column(String, nullable=True)
    keywords = Column(JSON, nullable=True)


class TeamMemberRow(Base):
    __tablename__ = "team"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(Float, nullable=False, index=True)
    name = Column(String, nullable=False)
    title = Column(String, nullable=False)
    bio = Column(Text, nullable=False)
    image_url = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True)


class GalleryImageRow(Base):
    __tablename__ = "gallery-images"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(Float, nullable=False, index=True)
    image_url = Column(String, nullable=False)
    alt = Column(String, nullable=False, default="")


class GalleryVideoRow(Base):
    __tablename__ = "gallery-videos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(Float, nullable=False, index=True)
    video_url = Column(String, nullable=False)
    alt = Column(String, nullable=False, default="")
    thumbnail_url = Column(String, nullable=True)


class TestimonialRow(Base):
    __tablename__ = "testimonials"
    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(Float, nullable=False, index=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    company = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    rating = Column(Float, nullable=False)


ROW_TYPES: Dict[ContentKind, type] = {
    ContentKind.AUTHORS: AuthorRow,
    ContentKind.BLOGS: BlogRow,
    ContentKind.TEAM: TeamMemberRow,
    ContentKind.GALLERY_IMAGES: GalleryImageRow,
    ContentKind.GALLERY_VIDEOS: GalleryVideoRow,
    ContentKind.TESTIMONIALS: TestimonialRow,
}
