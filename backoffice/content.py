"""
Content actions for the back office.

Every action follows the same shape: validate the fields, write the
relational store, upload or delete objects, keep the custom order record
tidy and invalidate the cache tag of the affected kind. Collaborators are
passed in explicitly so tests can swap in the in-memory doubles.
"""

from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from backoffice.cache import CACHE_TAGS, TagCache
from backoffice.db import (
    AuthorRecord,
    BlogRecord,
    ContentKind,
    ContentStore,
    GalleryImageRecord,
    GalleryVideoRecord,
    Record,
    TeamMemberRecord,
)
from backoffice.ordering import (
    OrderStore,
    OrderStoreError,
    append_id,
    merge,
    namespace_for,
    remove_id,
    replace_order,
)
from backoffice.storage import (
    AUTHOR_FOLDER,
    BLOG_FEATURED_FOLDER,
    GALLERY_IMAGE_FOLDER,
    GALLERY_THUMBNAIL_FOLDER,
    GALLERY_VIDEO_FOLDER,
    TEAM_FOLDER,
    StorageClient,
    StorageError,
    generate_object_path,
)

logger = logging.getLogger(__name__)

MAX_ALT_LENGTH = 200
MIN_TESTIMONIAL_LENGTH = 10
MAX_TESTIMONIAL_LENGTH = 1000
DEFAULT_ORDERED_KINDS = ("gallery-images", "gallery-videos", "team")

# Stored object URLs per kind, removed together with the row.
_OBJECT_FIELDS = {
    ContentKind.AUTHORS: ("avatar_url",),
    ContentKind.BLOGS: ("featured_image_url",),
    ContentKind.TEAM: ("image_url",),
    ContentKind.GALLERY_IMAGES: ("image_url",),
    ContentKind.GALLERY_VIDEOS: ("video_url", "thumbnail_url"),
    ContentKind.TESTIMONIALS: (),
}

_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


class ValidationError(ValueError):
    """Submitted fields failed validation."""


class NotFoundError(LookupError):
    """The requested entity does not exist."""


@dataclass
class UploadedFile:
    filename: str
    data: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class BlogInput:
    title: str
    content: str
    author_id: Optional[int]
    description: Optional[str] = None
    is_published: bool = False
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    keywords: Optional[object] = None


@dataclass
class GalleryItemInput:
    url: str
    alt: str = ""
    thumbnail_url: Optional[str] = None


@dataclass
class TestimonialInput:
    name: str
    address: str
    company: str
    content: str
    rating: float


@dataclass
class TeamMemberInput:
    name: str
    title: str
    bio: str


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def _optional(value: Optional[str]) -> Optional[str]:
    value = _clean(value)
    return value or None


def slugify(value: str) -> str:
    return _SLUG_CHARS.sub("-", value.lower()).strip("-") or "member"


def parse_keywords(value: object) -> Optional[list[str]]:
    """Accept a list of keywords or a JSON array string; blank means none."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as exc:
            raise ValidationError("Keywords must be a JSON array of strings") from exc
    if not isinstance(value, list) or not all(isinstance(k, str) for k in value):
        raise ValidationError("Keywords must be a JSON array of strings")
    return [k.strip() for k in value if k.strip()]


@dataclass
class ContentService:
    store: ContentStore
    storage: StorageClient
    orders: OrderStore
    cache: TagCache
    ordered_kinds: Sequence[str] = field(default=DEFAULT_ORDERED_KINDS)

    # ------------------------------------------------------------------
    # Shared plumbing
    # ------------------------------------------------------------------

    def namespace(self, kind: ContentKind) -> Optional[str]:
        return namespace_for(kind, self.ordered_kinds)

    def _require(self, kind: ContentKind, entity_id: int) -> Record:
        record = self.store.get(kind, entity_id)
        if record is None:
            raise NotFoundError(f"{kind.value} {entity_id} not found")
        return record

    def _invalidate(self, *kinds: ContentKind) -> None:
        self.cache.invalidate(*[CACHE_TAGS[ContentKind(k)] for k in kinds])

    def _upload(self, file: Optional[UploadedFile], folder: str) -> Optional[str]:
        if file is None or file.size == 0:
            return None
        path = generate_object_path(file.filename, folder)
        self.storage.upload_bytes(path, file.data, file.content_type)
        return self.storage.public_url(path)

    def _write_or_discard(
        self, uploaded: Iterable[Optional[str]], write: Callable[[], Record]
    ) -> Record:
        """Run a store write; delete the objects just uploaded for it if it fails."""
        try:
            return write()
        except Exception:
            # Don't leave an orphaned upload behind a failed write.
            self._discard_objects(uploaded)
            raise

    def _discard_objects(self, urls: Iterable[Optional[str]]) -> None:
        for url in urls:
            if not url:
                continue
            path = self.storage.path_from_url(url)
            if path is None:
                logger.info("Skipping delete of external object %s", url)
                continue
            try:
                self.storage.delete(path)
            except StorageError:
                logger.warning("Failed to delete stored object %s", path, exc_info=True)

    def _prune_order(self, kind: ContentKind, ids: Iterable[int]) -> None:
        namespace = self.namespace(kind)
        if namespace is None:
            return
        for entity_id in ids:
            try:
                remove_id(self.orders, namespace, entity_id)
            except OrderStoreError:
                logger.warning(
                    "Could not prune %s from %s; leaving stale reference",
                    entity_id,
                    namespace,
                    exc_info=True,
                )

    def _delete_entities(
        self, kind: ContentKind, ids: Sequence[int], *, require_all: bool = False
    ) -> list[Record]:
        records = self.store.get_many(kind, ids)
        if require_all and len(records) != len(set(ids)):
            missing = set(ids) - {r.id for r in records}
            raise NotFoundError(f"{kind.value} {sorted(missing)} not found")
        if not records:
            return []
        self.store.delete_many(kind, [r.id for r in records])
        self._prune_order(kind, [r.id for r in records])
        self._discard_objects(
            getattr(record, name)
            for record in records
            for name in _OBJECT_FIELDS[kind]
        )
        self._invalidate(kind)
        logger.info("Deleted %d %s", len(records), kind.value)
        return records

    def list_ordered(self, kind: ContentKind) -> list[Record]:
        """Canonical list with the custom order overlaid where enabled."""
        canonical = self.store.list_by_created_desc(kind)
        namespace = self.namespace(kind)
        if namespace is None:
            return canonical
        try:
            custom_order = self.orders.get_order(namespace)
        except OrderStoreError:
            logger.warning(
                "Order store unavailable for %s; using creation order",
                namespace,
                exc_info=True,
            )
            custom_order = None
        return merge(canonical, custom_order)

    def _ordered_namespace(self, kind: ContentKind) -> str:
        namespace = self.namespace(kind)
        if namespace is None:
            raise ValidationError(f"Custom ordering is not enabled for {kind.value}")
        return namespace

    def custom_order(self, kind: ContentKind) -> list[str]:
        return self.orders.get_order(self._ordered_namespace(kind))

    def reorder(self, kind: ContentKind, ids: Sequence[int]) -> list[str]:
        namespace = self._ordered_namespace(kind)
        order = replace_order(self.orders, namespace, ids)
        self._invalidate(kind)
        return order

    def add_to_order(self, kind: ContentKind, entity_id: int) -> list[str]:
        namespace = self._ordered_namespace(kind)
        self._require(kind, entity_id)
        append_id(self.orders, namespace, entity_id)
        self._invalidate(kind)
        return self.custom_order(kind)

    # ------------------------------------------------------------------
    # Authors
    # ------------------------------------------------------------------

    def list_authors(self) -> list[AuthorRecord]:
        return list(reversed(self.store.list_by_created_desc(ContentKind.AUTHORS)))

    def get_author(self, author_id: int) -> AuthorRecord:
        return self._require(ContentKind.AUTHORS, author_id)

    def create_author(
        self, name: str, email: Optional[str], avatar: Optional[UploadedFile]
    ) -> AuthorRecord:
        name = _clean(name)
        if not name or avatar is None or avatar.size == 0:
            raise ValidationError("Name and avatar are required")
        avatar_url = self._upload(avatar, AUTHOR_FOLDER)
        values = {"name": name, "email": _optional(email), "avatar_url": avatar_url}
        author = self._write_or_discard(
            [avatar_url], lambda: self.store.create(ContentKind.AUTHORS, values)
        )
        self._invalidate(ContentKind.AUTHORS)
        return author

    def update_author(
        self,
        author_id: int,
        name: str,
        email: Optional[str],
        avatar: Optional[UploadedFile] = None,
    ) -> AuthorRecord:
        name = _clean(name)
        if not name:
            raise ValidationError("Name is required")
        current = self._require(ContentKind.AUTHORS, author_id)
        values = {"name": name, "email": _optional(email)}
        new_url = self._upload(avatar, AUTHOR_FOLDER)
        if new_url:
            values["avatar_url"] = new_url
        author = self._write_or_discard(
            [new_url],
            lambda: self.store.update(ContentKind.AUTHORS, author_id, values),
        )
        if new_url:
            self._discard_objects([current.avatar_url])
        self._invalidate(ContentKind.AUTHORS, ContentKind.BLOGS)
        return author

    def delete_author(self, author_id: int) -> None:
        self._require(ContentKind.AUTHORS, author_id)
        posts = [
            blog
            for blog in self.store.list_by_created_desc(ContentKind.BLOGS)
            if blog.author_id == author_id
        ]
        if posts:
            raise ValidationError(
                f"Author has {len(posts)} blog post(s); reassign or delete them first"
            )
        self._delete_entities(ContentKind.AUTHORS, [author_id])

    # ------------------------------------------------------------------
    # Blogs
    # ------------------------------------------------------------------

    def _with_authors(
        self, blogs: list[BlogRecord]
    ) -> list[tuple[BlogRecord, Optional[AuthorRecord]]]:
        authors = {
            a.id: a
            for a in self.store.get_many(
                ContentKind.AUTHORS, [b.author_id for b in blogs]
            )
        }
        return [(blog, authors.get(blog.author_id)) for blog in blogs]

    def list_blogs(
        self, *, published_only: bool = False
    ) -> list[tuple[BlogRecord, Optional[AuthorRecord]]]:
        blogs = self.store.list_by_created_desc(ContentKind.BLOGS)
        if published_only:
            blogs = [b for b in blogs if b.is_published]
        return self._with_authors(blogs)

    def get_blog(
        self, blog_id: int, *, published_only: bool = False
    ) -> tuple[BlogRecord, Optional[AuthorRecord]]:
        blog = self._require(ContentKind.BLOGS, blog_id)
        if published_only and not blog.is_published:
            raise NotFoundError(f"blogs {blog_id} not found")
        return self._with_authors([blog])[0]

    def count_blogs(self) -> int:
        return self.store.count(ContentKind.BLOGS)

    def _blog_values(self, data: BlogInput) -> dict:
        title = _clean(data.title)
        content = _clean(data.content)
        if not title or not content or not data.author_id:
            raise ValidationError("Title, content, and author are required")
        if self.store.get(ContentKind.AUTHORS, int(data.author_id)) is None:
            raise ValidationError("Author not found")
        return {
            "title": title,
            "description": _optional(data.description),
            "content": content,
            "author_id": int(data.author_id),
            "is_published": bool(data.is_published),
            "seo_title": _optional(data.seo_title),
            "seo_description": _optional(data.seo_description),
            "keywords": parse_keywords(data.keywords),
        }

    def create_blog(
        self, data: BlogInput, featured_image: Optional[UploadedFile] = None
    ) -> BlogRecord:
        values = self._blog_values(data)
        image_url = self._upload(featured_image, BLOG_FEATURED_FOLDER)
        values["featured_image_url"] = image_url
        blog = self._write_or_discard(
            [image_url], lambda: self.store.create(ContentKind.BLOGS, values)
        )
        self._invalidate(ContentKind.BLOGS)
        return blog

    def update_blog(
        self,
        blog_id: int,
        data: BlogInput,
        featured_image: Optional[UploadedFile] = None,
    ) -> BlogRecord:
        values = self._blog_values(data)
        current = self._require(ContentKind.BLOGS, blog_id)
        new_url = self._upload(featured_image, BLOG_FEATURED_FOLDER)
        if new_url:
            values["featured_image_url"] = new_url
        values["updated_at"] = time.time()
        blog = self._write_or_discard(
            [new_url], lambda: self.store.update(ContentKind.BLOGS, blog_id, values)
        )
        if new_url and current.featured_image_url != new_url:
            self._discard_objects([current.featured_image_url])
        self._invalidate(ContentKind.BLOGS)
        return blog

    def delete_blog(self, blog_id: int) -> None:
        self._delete_entities(ContentKind.BLOGS, [blog_id], require_all=True)

    # ------------------------------------------------------------------
    # Team
    # ------------------------------------------------------------------

    def list_team(self) -> list[TeamMemberRecord]:
        return self.list_ordered(ContentKind.TEAM)

    def get_team_member(self, member_id: int) -> TeamMemberRecord:
        return self._require(ContentKind.TEAM, member_id)

    def get_team_member_by_slug(self, slug: str) -> TeamMemberRecord:
        for member in self.store.list_by_created_desc(ContentKind.TEAM):
            if member.slug == slug:
                return member
        raise NotFoundError(f"team member {slug!r} not found")

    def _unique_slug(self, name: str) -> str:
        taken = {m.slug for m in self.store.list_by_created_desc(ContentKind.TEAM)}
        base = slugify(name)
        slug, n = base, 2
        while slug in taken:
            slug, n = f"{base}-{n}", n + 1
        return slug

    @staticmethod
    def _team_values(data: TeamMemberInput, image_missing: bool = False) -> dict:
        values = {
            "name": _clean(data.name),
            "title": _clean(data.title),
            "bio": _clean(data.bio),
        }
        missing = [
            label
            for label, present in (
                ("name", values["name"]),
                ("job title", values["title"]),
                ("biography", values["bio"]),
                ("profile image", not image_missing),
            )
            if not present
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        return values

    def create_team_member(
        self, data: TeamMemberInput, image: Optional[UploadedFile]
    ) -> TeamMemberRecord:
        values = self._team_values(
            data, image_missing=image is None or image.size == 0
        )
        values["image_url"] = self._upload(image, TEAM_FOLDER)
        values["slug"] = self._unique_slug(values["name"])
        member = self._write_or_discard(
            [values["image_url"]], lambda: self.store.create(ContentKind.TEAM, values)
        )
        self._invalidate(ContentKind.TEAM)
        return member

    def update_team_member(
        self,
        member_id: int,
        data: TeamMemberInput,
        image: Optional[UploadedFile] = None,
    ) -> TeamMemberRecord:
        values = self._team_values(data)
        current = self._require(ContentKind.TEAM, member_id)
        new_url = self._upload(image, TEAM_FOLDER)
        if new_url:
            values["image_url"] = new_url
        member = self._write_or_discard(
            [new_url], lambda: self.store.update(ContentKind.TEAM, member_id, values)
        )
        if new_url:
            self._discard_objects([current.image_url])
        self._invalidate(ContentKind.TEAM)
        return member

    def update_team_members(
        self, updates: Sequence[tuple[int, TeamMemberInput]]
    ) -> list[TeamMemberRecord]:
        prepared = [(member_id, self._team_values(data)) for member_id, data in updates]
        for member_id, _ in prepared:
            self._require(ContentKind.TEAM, member_id)
        members = [
            self.store.update(ContentKind.TEAM, member_id, values)
            for member_id, values in prepared
        ]
        self._invalidate(ContentKind.TEAM)
        return members

    def delete_team_member(self, member_id: int) -> None:
        self._delete_entities(ContentKind.TEAM, [member_id], require_all=True)

    def delete_team_members(self, ids: Sequence[int]) -> int:
        return len(self._delete_entities(ContentKind.TEAM, ids))

    # ------------------------------------------------------------------
    # Gallery
    # ------------------------------------------------------------------

    @staticmethod
    def _gallery_values(items: Sequence[GalleryItemInput], label: str) -> list[dict]:
        if not items:
            raise ValidationError(f"Please select at least one {label.lower()}")
        prepared = []
        for index, item in enumerate(items, start=1):
            url = _clean(item.url)
            if not url:
                raise ValidationError(f"{label} {index}: {label} URL is required")
            alt = _clean(item.alt)
            if len(alt) > MAX_ALT_LENGTH:
                raise ValidationError(
                    f"{label} {index}: Alt text must be less than "
                    f"{MAX_ALT_LENGTH} characters"
                )
            prepared.append(
                {"url": url, "alt": alt, "thumbnail_url": _optional(item.thumbnail_url)}
            )
        return prepared

    @staticmethod
    def _check_alt_length(alt: Optional[str]) -> str:
        alt = _clean(alt)
        if len(alt) > MAX_ALT_LENGTH:
            raise ValidationError(
                f"Alt text must be less than {MAX_ALT_LENGTH} characters"
            )
        return alt

    @classmethod
    def _gallery_alt(cls, alt: Optional[str]) -> str:
        if not _clean(alt):
            raise ValidationError("Alt text is required")
        return cls._check_alt_length(alt)

    def list_gallery_images(self) -> list[GalleryImageRecord]:
        return self.list_ordered(ContentKind.GALLERY_IMAGES)

    def get_gallery_image(self, image_id: int) -> GalleryImageRecord:
        return self._require(ContentKind.GALLERY_IMAGES, image_id)

    def create_gallery_images(
        self, items: Sequence[GalleryItemInput]
    ) -> list[GalleryImageRecord]:
        prepared = self._gallery_values(items, "Image")
        images = [
            self.store.create(
                ContentKind.GALLERY_IMAGES,
                {"image_url": item["url"], "alt": item["alt"]},
            )
            for item in prepared
        ]
        self._invalidate(ContentKind.GALLERY_IMAGES)
        return images

    def upload_gallery_image(
        self, image: Optional[UploadedFile], alt: Optional[str] = ""
    ) -> GalleryImageRecord:
        if image is None or image.size == 0:
            raise ValidationError("Image file is required")
        alt = self._check_alt_length(alt)
        url = self._upload(image, GALLERY_IMAGE_FOLDER)
        return self._write_or_discard(
            [url],
            lambda: self.create_gallery_images([GalleryItemInput(url=url, alt=alt)])[0],
        )

    def update_gallery_image(
        self,
        image_id: int,
        alt: Optional[str],
        image: Optional[UploadedFile] = None,
        image_url: Optional[str] = None,
    ) -> GalleryImageRecord:
        values = {"alt": self._gallery_alt(alt)}
        current = self._require(ContentKind.GALLERY_IMAGES, image_id)
        uploaded = self._upload(image, GALLERY_IMAGE_FOLDER)
        new_url = uploaded or _optional(image_url)
        if new_url:
            values["image_url"] = new_url
        updated = self._write_or_discard(
            [uploaded],
            lambda: self.store.update(ContentKind.GALLERY_IMAGES, image_id, values),
        )
        if new_url and new_url != current.image_url:
            self._discard_objects([current.image_url])
        self._invalidate(ContentKind.GALLERY_IMAGES)
        return updated

    def delete_gallery_image(self, image_id: int) -> None:
        self._delete_entities(
            ContentKind.GALLERY_IMAGES, [image_id], require_all=True
        )

    def delete_gallery_images(self, ids: Sequence[int]) -> int:
        return len(self._delete_entities(ContentKind.GALLERY_IMAGES, ids))

    def list_gallery_videos(self) -> list[GalleryVideoRecord]:
        return self.list_ordered(ContentKind.GALLERY_VIDEOS)

    def get_gallery_video(self, video_id: int) -> GalleryVideoRecord:
        return self._require(ContentKind.GALLERY_VIDEOS, video_id)

    def create_gallery_videos(
        self, items: Sequence[GalleryItemInput]
    ) -> list[GalleryVideoRecord]:
        prepared = self._gallery_values(items, "Video")
        videos = [
            self.store.create(
                ContentKind.GALLERY_VIDEOS,
                {
                    "video_url": item["url"],
                    "alt": item["alt"],
                    "thumbnail_url": item["thumbnail_url"],
                },
            )
            for item in prepared
        ]
        self._invalidate(ContentKind.GALLERY_VIDEOS)
        return videos

    def upload_gallery_video(
        self,
        video: Optional[UploadedFile],
        alt: Optional[str] = "",
        thumbnail: Optional[UploadedFile] = None,
    ) -> GalleryVideoRecord:
        if video is None or video.size == 0:
            raise ValidationError("Video file is required")
        alt = self._check_alt_length(alt)
        url = self._upload(video, GALLERY_VIDEO_FOLDER)
        thumbnail_url = self._upload(thumbnail, GALLERY_THUMBNAIL_FOLDER)
        item = GalleryItemInput(url=url, alt=alt, thumbnail_url=thumbnail_url)
        return self._write_or_discard(
            [url, thumbnail_url], lambda: self.create_gallery_videos([item])[0]
        )

    def update_gallery_video(
        self,
        video_id: int,
        alt: Optional[str],
        video: Optional[UploadedFile] = None,
        video_url: Optional[str] = None,
        thumbnail: Optional[UploadedFile] = None,
        thumbnail_url: Optional[str] = None,
    ) -> GalleryVideoRecord:
        values = {"alt": self._gallery_alt(alt)}
        current = self._require(ContentKind.GALLERY_VIDEOS, video_id)
        uploaded_video = self._upload(video, GALLERY_VIDEO_FOLDER)
        uploaded_thumb = self._upload(thumbnail, GALLERY_THUMBNAIL_FOLDER)
        new_video = uploaded_video or _optional(video_url)
        new_thumb = uploaded_thumb or _optional(thumbnail_url)
        if new_video:
            values["video_url"] = new_video
        if new_thumb:
            values["thumbnail_url"] = new_thumb
        updated = self._write_or_discard(
            [uploaded_video, uploaded_thumb],
            lambda: self.store.update(ContentKind.GALLERY_VIDEOS, video_id, values),
        )
        replaced = []
        if new_video and new_video != current.video_url:
            replaced.append(current.video_url)
        if new_thumb and new_thumb != current.thumbnail_url:
            replaced.append(current.thumbnail_url)
        self._discard_objects(replaced)
        self._invalidate(ContentKind.GALLERY_VIDEOS)
        return updated

    def delete_gallery_video(self, video_id: int) -> None:
        self._delete_entities(
            ContentKind.GALLERY_VIDEOS, [video_id], require_all=True
        )

    def delete_gallery_videos(self, ids: Sequence[int]) -> int:
        return len(self._delete_entities(ContentKind.GALLERY_VIDEOS, ids))

    # ------------------------------------------------------------------
    # Testimonials
    # ------------------------------------------------------------------

    @staticmethod
    def _testimonial_values(data: TestimonialInput) -> dict:
        values = {
            "name": _clean(data.name),
            "address": _clean(data.address),
            "company": _clean(data.company),
            "content": _clean(data.content),
        }
        if not all(values.values()):
            raise ValidationError("All fields are required")
        try:
            rating = float(data.rating)
        except (TypeError, ValueError):
            rating = 0.0
        if not 1 <= rating <= 5:
            raise ValidationError("Rating must be between 1 and 5")
        if len(values["content"]) < MIN_TESTIMONIAL_LENGTH:
            raise ValidationError(
                f"Content must be at least {MIN_TESTIMONIAL_LENGTH} characters long"
            )
        if len(values["content"]) > MAX_TESTIMONIAL_LENGTH:
            raise ValidationError(
                f"Content must be less than {MAX_TESTIMONIAL_LENGTH} characters"
            )
        values["rating"] = rating
        return values

    def list_testimonials(self):
        return self.list_ordered(ContentKind.TESTIMONIALS)

    def get_testimonial(self, testimonial_id: int):
        return self._require(ContentKind.TESTIMONIALS, testimonial_id)

    def create_testimonial(self, data: TestimonialInput):
        testimonial = self.store.create(
            ContentKind.TESTIMONIALS, self._testimonial_values(data)
        )
        self._invalidate(ContentKind.TESTIMONIALS)
        return testimonial

    def update_testimonial(self, testimonial_id: int, data: TestimonialInput):
        values = self._testimonial_values(data)
        self._require(ContentKind.TESTIMONIALS, testimonial_id)
        testimonial = self.store.update(ContentKind.TESTIMONIALS, testimonial_id, values)
        self._invalidate(ContentKind.TESTIMONIALS)
        return testimonial

    def delete_testimonial(self, testimonial_id: int) -> None:
        self._delete_entities(
            ContentKind.TESTIMONIALS, [testimonial_id], require_all=True
        )
