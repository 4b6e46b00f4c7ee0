"""
Pydantic schemas for the back office API.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class RecordModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class AuthorResponse(RecordModel):
    id: int
    created_at: float
    name: str
    email: Optional[str] = None
    avatar_url: str


class AuthorSummary(RecordModel):
    id: int
    name: str
    email: Optional[str] = None
    avatar_url: str


class BlogResponse(RecordModel):
    id: int
    created_at: float
    updated_at: Optional[float] = None
    title: str
    description: Optional[str] = None
    content: str
    featured_image_url: Optional[str] = None
    author_id: int
    is_published: bool
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    keywords: Optional[list[str]] = None
    author: Optional[AuthorSummary] = None


class TeamMemberResponse(RecordModel):
    id: int
    created_at: float
    name: str
    title: str
    bio: str
    image_url: str
    slug: str


class GalleryImageResponse(RecordModel):
    id: int
    created_at: float
    image_url: str
    alt: str


class GalleryVideoResponse(RecordModel):
    id: int
    created_at: float
    video_url: str
    alt: str
    thumbnail_url: Optional[str] = None


class TestimonialResponse(RecordModel):
    id: int
    created_at: float
    name: str
    address: str
    company: str
    content: str
    rating: float


class AuthorsResponse(BaseModel):
    authors: list[AuthorResponse]


class BlogsResponse(BaseModel):
    blogs: list[BlogResponse]


class CountResponse(BaseModel):
    count: int


class TeamResponse(BaseModel):
    members: list[TeamMemberResponse]


class GalleryImagesResponse(BaseModel):
    images: list[GalleryImageResponse]


class GalleryVideosResponse(BaseModel):
    videos: list[GalleryVideoResponse]


class TestimonialsResponse(BaseModel):
    testimonials: list[TestimonialResponse]


class GalleryImageItem(BaseModel):
    image_url: str = Field(..., max_length=2048)
    alt: str = ""


class GalleryImagesCreateRequest(BaseModel):
    images: list[GalleryImageItem]


class GalleryVideoItem(BaseModel):
    video_url: str = Field(..., max_length=2048)
    alt: str = ""
    thumbnail_url: Optional[str] = None


class GalleryVideosCreateRequest(BaseModel):
    videos: list[GalleryVideoItem]


class TestimonialRequest(BaseModel):
    name: str = ""
    address: str = ""
    company: str = ""
    content: str = ""
    rating: float = 0


class TeamMemberUpdateItem(BaseModel):
    id: int
    name: str = ""
    title: str = ""
    bio: str = ""


class TeamMembersUpdateRequest(BaseModel):
    members: list[TeamMemberUpdateItem]


class IdsRequest(BaseModel):
    ids: list[int]


class OrderResponse(BaseModel):
    namespace: str
    ids: list[str]


class DeletedResponse(BaseModel):
    deleted: int


class StatusResponse(BaseModel):
    status: Literal["ok"]


class LoginRequest(BaseModel):
    username: str = Field(..., max_length=128)
    password: str = Field(..., max_length=256)


class SessionResponse(BaseModel):
    username: str
    name: str


class PresignResponse(BaseModel):
    upload_url: str
    public_url: str
    path: str
