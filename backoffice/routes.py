"""
Public and session HTTP routes for the back office API.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from backoffice.auth import (
    AdminUser,
    clear_session_cookie,
    create_session_token,
    require_admin,
    set_session_cookie,
    verify_credentials,
)
from backoffice.cache import CACHE_TAGS, TagCache
from backoffice.config import Settings, get_settings
from backoffice.content import ContentService
from backoffice.db import AuthorRecord, BlogRecord, ContentKind
from backoffice.dependencies import get_content_service, get_tag_cache
from backoffice.schemas import (
    BlogResponse,
    BlogsResponse,
    GalleryImagesResponse,
    GalleryVideosResponse,
    LoginRequest,
    SessionResponse,
    StatusResponse,
    TeamMemberResponse,
    TeamResponse,
    TestimonialsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def blog_payload(blog: BlogRecord, author: Optional[AuthorRecord]) -> dict:
    payload = blog.as_dict()
    payload["author"] = (
        {
            "id": author.id,
            "name": author.name,
            "email": author.email,
            "avatar_url": author.avatar_url,
        }
        if author
        else None
    )
    return payload


def _cached(cache: TagCache, kind: ContentKind, build: Callable[[], dict]) -> dict:
    tag = CACHE_TAGS[kind]
    payload = cache.get(tag)
    if payload is None:
        payload = build()
        cache.set(tag, payload)
    return payload


@router.get("/home/gallery-images", response_model=GalleryImagesResponse)
def home_gallery_images(
    service: ContentService = Depends(get_content_service),
    cache: TagCache = Depends(get_tag_cache),
):
    return _cached(
        cache,
        ContentKind.GALLERY_IMAGES,
        lambda: {"images": [r.as_dict() for r in service.list_gallery_images()]},
    )


@router.get("/home/gallery-videos", response_model=GalleryVideosResponse)
def home_gallery_videos(
    service: ContentService = Depends(get_content_service),
    cache: TagCache = Depends(get_tag_cache),
):
    return _cached(
        cache,
        ContentKind.GALLERY_VIDEOS,
        lambda: {"videos": [r.as_dict() for r in service.list_gallery_videos()]},
    )


@router.get("/home/team", response_model=TeamResponse)
def home_team(
    service: ContentService = Depends(get_content_service),
    cache: TagCache = Depends(get_tag_cache),
):
    return _cached(
        cache,
        ContentKind.TEAM,
        lambda: {"members": [r.as_dict() for r in service.list_team()]},
    )


@router.get("/home/testimonials", response_model=TestimonialsResponse)
def home_testimonials(
    service: ContentService = Depends(get_content_service),
    cache: TagCache = Depends(get_tag_cache),
):
    return _cached(
        cache,
        ContentKind.TESTIMONIALS,
        lambda: {"testimonials": [r.as_dict() for r in service.list_testimonials()]},
    )


@router.get("/team/{slug}", response_model=TeamMemberResponse)
def team_member_page(
    slug: str, service: ContentService = Depends(get_content_service)
):
    return service.get_team_member_by_slug(slug).as_dict()


@router.get("/blogs", response_model=BlogsResponse)
def published_blogs(
    service: ContentService = Depends(get_content_service),
    cache: TagCache = Depends(get_tag_cache),
):
    return _cached(
        cache,
        ContentKind.BLOGS,
        lambda: {
            "blogs": [
                blog_payload(blog, author)
                for blog, author in service.list_blogs(published_only=True)
            ]
        },
    )


@router.get("/blogs/{blog_id}", response_model=BlogResponse)
def published_blog(
    blog_id: int, service: ContentService = Depends(get_content_service)
):
    blog, author = service.get_blog(blog_id, published_only=True)
    return blog_payload(blog, author)


@router.post("/auth/login", response_model=SessionResponse)
def login(
    payload: LoginRequest,
    response: Response,
    settings: Settings = Depends(get_settings),
):
    if not verify_credentials(settings, payload.username, payload.password):
        logger.info("Failed admin login for %r", payload.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    user = AdminUser(
        username=settings.admin_username, name=settings.admin_display_name
    )
    set_session_cookie(response, settings, create_session_token(settings, user))
    return SessionResponse(username=user.username, name=user.name)


@router.post("/auth/logout", response_model=StatusResponse)
def logout(response: Response, settings: Settings = Depends(get_settings)):
    clear_session_cookie(response, settings)
    return StatusResponse(status="ok")


@router.get("/auth/me", response_model=SessionResponse)
def current_session(user: AdminUser = Depends(require_admin)):
    return SessionResponse(username=user.username, name=user.name)
