"""
Administrative CRUD routes. Every route requires an admin session.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from backoffice.auth import require_admin
from backoffice.content import (
    BlogInput,
    ContentService,
    GalleryItemInput,
    TeamMemberInput,
    TestimonialInput,
    UploadedFile,
)
from backoffice.db import ContentKind
from backoffice.dependencies import get_content_service, get_storage_client
from backoffice.routes import blog_payload
from backoffice.schemas import (
    AuthorResponse,
    AuthorsResponse,
    BlogResponse,
    BlogsResponse,
    CountResponse,
    DeletedResponse,
    GalleryImageResponse,
    GalleryImagesCreateRequest,
    GalleryImagesResponse,
    GalleryVideoResponse,
    GalleryVideosCreateRequest,
    GalleryVideosResponse,
    IdsRequest,
    OrderResponse,
    PresignResponse,
    StatusResponse,
    TeamMemberResponse,
    TeamMembersUpdateRequest,
    TeamResponse,
    TestimonialRequest,
    TestimonialResponse,
    TestimonialsResponse,
)
from backoffice.storage import UPLOAD_FOLDERS, StorageClient, generate_object_path

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])

OK = StatusResponse(status="ok")


async def _read_upload(file: Optional[UploadFile]) -> Optional[UploadedFile]:
    if file is None or not file.filename:
        return None
    data = await file.read()
    if not data:
        return None
    return UploadedFile(
        filename=file.filename,
        data=data,
        content_type=file.content_type or "application/octet-stream",
    )


def _parse_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value) if value not in (None, "") else None
    except ValueError:
        return None


def _is_true(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("true", "1", "on", "yes")


def _register_order_routes(prefix: str, kind: ContentKind) -> None:
    """PUT/GET {prefix}/order and POST {prefix}/order/{id} for one kind."""
    slug = kind.value.replace("-", "_")

    @router.get(f"{prefix}/order", response_model=OrderResponse, name=f"{slug}_order")
    def current_order(service: ContentService = Depends(get_content_service)):
        ids = service.custom_order(kind)
        return OrderResponse(namespace=service.namespace(kind), ids=ids)

    @router.put(f"{prefix}/order", response_model=OrderResponse, name=f"{slug}_reorder")
    def reorder(
        payload: IdsRequest, service: ContentService = Depends(get_content_service)
    ):
        ids = service.reorder(kind, payload.ids)
        logger.info("Reordered %s: %s", kind.value, ids)
        return OrderResponse(namespace=service.namespace(kind), ids=ids)

    @router.post(
        f"{prefix}/order/{{entity_id}}",
        response_model=OrderResponse,
        name=f"{slug}_append_order",
    )
    def append_to_order(
        entity_id: int, service: ContentService = Depends(get_content_service)
    ):
        ids = service.add_to_order(kind, entity_id)
        return OrderResponse(namespace=service.namespace(kind), ids=ids)


# ----------------------------------------------------------------------
# Uploads
# ----------------------------------------------------------------------


@router.get("/uploads/presign", response_model=PresignResponse)
def presign_upload(
    folder: str = Query(...),
    filename: str = Query(..., min_length=1, max_length=255),
    content_type: str = Query("application/octet-stream"),
    expires_in: int = Query(3600, ge=60, le=86400),
    storage: StorageClient = Depends(get_storage_client),
):
    if folder not in UPLOAD_FOLDERS:
        raise HTTPException(status_code=400, detail=f"Unknown upload folder {folder!r}")
    path = generate_object_path(filename, folder)
    return PresignResponse(
        upload_url=storage.presign_put(
            path, expires_in=expires_in, content_type=content_type
        ),
        public_url=storage.public_url(path),
        path=path,
    )


# ----------------------------------------------------------------------
# Authors
# ----------------------------------------------------------------------


@router.get("/authors", response_model=AuthorsResponse)
def list_authors(service: ContentService = Depends(get_content_service)):
    return {"authors": [a.as_dict() for a in service.list_authors()]}


@router.get("/authors/{author_id}", response_model=AuthorResponse)
def get_author(author_id: int, service: ContentService = Depends(get_content_service)):
    return service.get_author(author_id).as_dict()


@router.post("/authors", response_model=AuthorResponse, status_code=201)
async def create_author(
    name: str = Form(""),
    email: Optional[str] = Form(None),
    avatar: Optional[UploadFile] = File(None),
    service: ContentService = Depends(get_content_service),
):
    author = service.create_author(name, email, await _read_upload(avatar))
    logger.info("Created author %s", author.id)
    return author.as_dict()


@router.put("/authors/{author_id}", response_model=AuthorResponse)
async def update_author(
    author_id: int,
    name: str = Form(""),
    email: Optional[str] = Form(None),
    avatar: Optional[UploadFile] = File(None),
    service: ContentService = Depends(get_content_service),
):
    author = service.update_author(author_id, name, email, await _read_upload(avatar))
    return author.as_dict()


@router.delete("/authors/{author_id}", response_model=StatusResponse)
def delete_author(author_id: int, service: ContentService = Depends(get_content_service)):
    service.delete_author(author_id)
    return OK


# ----------------------------------------------------------------------
# Blogs
# ----------------------------------------------------------------------


async def _blog_form(
    title: str = Form(""),
    description: Optional[str] = Form(None),
    content: str = Form(""),
    author_id: Optional[str] = Form(None),
    is_published: Optional[str] = Form(None),
    seo_title: Optional[str] = Form(None),
    seo_description: Optional[str] = Form(None),
    keywords: Optional[str] = Form(None),
) -> BlogInput:
    return BlogInput(
        title=title,
        content=content,
        author_id=_parse_int(author_id),
        description=description,
        is_published=_is_true(is_published),
        seo_title=seo_title,
        seo_description=seo_description,
        keywords=keywords,
    )


@router.get("/blogs", response_model=BlogsResponse)
def list_blogs(service: ContentService = Depends(get_content_service)):
    return {"blogs": [blog_payload(b, a) for b, a in service.list_blogs()]}


@router.get("/blogs/count", response_model=CountResponse)
def count_blogs(service: ContentService = Depends(get_content_service)):
    return CountResponse(count=service.count_blogs())


@router.get("/blogs/{blog_id}", response_model=BlogResponse)
def get_blog(blog_id: int, service: ContentService = Depends(get_content_service)):
    return blog_payload(*service.get_blog(blog_id))


@router.post("/blogs", response_model=BlogResponse, status_code=201)
async def create_blog(
    data: BlogInput = Depends(_blog_form),
    featured_image: Optional[UploadFile] = File(None),
    service: ContentService = Depends(get_content_service),
):
    blog = service.create_blog(data, await _read_upload(featured_image))
    logger.info("Created blog %s", blog.id)
    return blog_payload(*service.get_blog(blog.id))


@router.put("/blogs/{blog_id}", response_model=BlogResponse)
async def update_blog(
    blog_id: int,
    data: BlogInput = Depends(_blog_form),
    featured_image: Optional[UploadFile] = File(None),
    service: ContentService = Depends(get_content_service),
):
    service.update_blog(blog_id, data, await _read_upload(featured_image))
    return blog_payload(*service.get_blog(blog_id))


@router.delete("/blogs/{blog_id}", response_model=StatusResponse)
def delete_blog(blog_id: int, service: ContentService = Depends(get_content_service)):
    service.delete_blog(blog_id)
    return OK


# ----------------------------------------------------------------------
# Team
# ----------------------------------------------------------------------

_register_order_routes("/team", ContentKind.TEAM)


@router.get("/team", response_model=TeamResponse)
def list_team(service: ContentService = Depends(get_content_service)):
    return {"members": [m.as_dict() for m in service.list_team()]}


@router.get("/team/{member_id}", response_model=TeamMemberResponse)
def get_team_member(member_id: int, service: ContentService = Depends(get_content_service)):
    return service.get_team_member(member_id).as_dict()


@router.post("/team", response_model=TeamMemberResponse, status_code=201)
async def create_team_member(
    name: str = Form(""),
    title: str = Form(""),
    bio: str = Form(""),
    image: Optional[UploadFile] = File(None),
    service: ContentService = Depends(get_content_service),
):
    member = service.create_team_member(
        TeamMemberInput(name=name, title=title, bio=bio), await _read_upload(image)
    )
    logger.info("Created team member %s", member.id)
    return member.as_dict()


@router.patch("/team", response_model=TeamResponse)
def update_team_members(
    payload: TeamMembersUpdateRequest,
    service: ContentService = Depends(get_content_service),
):
    members = service.update_team_members(
        [
            (item.id, TeamMemberInput(name=item.name, title=item.title, bio=item.bio))
            for item in payload.members
        ]
    )
    return {"members": [m.as_dict() for m in members]}


@router.post("/team/delete", response_model=DeletedResponse)
def delete_team_members(
    payload: IdsRequest, service: ContentService = Depends(get_content_service)
):
    return DeletedResponse(deleted=service.delete_team_members(payload.ids))


@router.put("/team/{member_id}", response_model=TeamMemberResponse)
async def update_team_member(
    member_id: int,
    name: str = Form(""),
    title: str = Form(""),
    bio: str = Form(""),
    image: Optional[UploadFile] = File(None),
    service: ContentService = Depends(get_content_service),
):
    member = service.update_team_member(
        member_id,
        TeamMemberInput(name=name, title=title, bio=bio),
        await _read_upload(image),
    )
    return member.as_dict()


@router.delete("/team/{member_id}", response_model=StatusResponse)
def delete_team_member(member_id: int, service: ContentService = Depends(get_content_service)):
    service.delete_team_member(member_id)
    return OK


# ----------------------------------------------------------------------
# Gallery images
# ----------------------------------------------------------------------

_register_order_routes("/gallery/images", ContentKind.GALLERY_IMAGES)


@router.get("/gallery/images", response_model=GalleryImagesResponse)
def list_gallery_images(service: ContentService = Depends(get_content_service)):
    return {"images": [i.as_dict() for i in service.list_gallery_images()]}


@router.get("/gallery/images/{image_id}", response_model=GalleryImageResponse)
def get_gallery_image(image_id: int, service: ContentService = Depends(get_content_service)):
    return service.get_gallery_image(image_id).as_dict()


@router.post("/gallery/images", response_model=GalleryImagesResponse, status_code=201)
def create_gallery_images(
    payload: GalleryImagesCreateRequest,
    service: ContentService = Depends(get_content_service),
):
    images = service.create_gallery_images(
        [GalleryItemInput(url=item.image_url, alt=item.alt) for item in payload.images]
    )
    logger.info("Added %d gallery images", len(images))
    return {"images": [i.as_dict() for i in images]}


@router.post("/gallery/images/upload", response_model=GalleryImageResponse, status_code=201)
async def upload_gallery_image(
    image: Optional[UploadFile] = File(None),
    alt: str = Form(""),
    service: ContentService = Depends(get_content_service),
):
    return service.upload_gallery_image(await _read_upload(image), alt).as_dict()


@router.post("/gallery/images/delete", response_model=DeletedResponse)
def delete_gallery_images(
    payload: IdsRequest, service: ContentService = Depends(get_content_service)
):
    return DeletedResponse(deleted=service.delete_gallery_images(payload.ids))


@router.put("/gallery/images/{image_id}", response_model=GalleryImageResponse)
async def update_gallery_image(
    image_id: int,
    alt: str = Form(""),
    image_url: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: ContentService = Depends(get_content_service),
):
    updated = service.update_gallery_image(
        image_id, alt, image=await _read_upload(image), image_url=image_url
    )
    return updated.as_dict()


@router.delete("/gallery/images/{image_id}", response_model=StatusResponse)
def delete_gallery_image(image_id: int, service: ContentService = Depends(get_content_service)):
    service.delete_gallery_image(image_id)
    return OK


# ----------------------------------------------------------------------
# Gallery videos
# ----------------------------------------------------------------------

_register_order_routes("/gallery/videos", ContentKind.GALLERY_VIDEOS)


@router.get("/gallery/videos", response_model=GalleryVideosResponse)
def list_gallery_videos(service: ContentService = Depends(get_content_service)):
    return {"videos": [v.as_dict() for v in service.list_gallery_videos()]}


@router.get("/gallery/videos/{video_id}", response_model=GalleryVideoResponse)
def get_gallery_video(video_id: int, service: ContentService = Depends(get_content_service)):
    return service.get_gallery_video(video_id).as_dict()


@router.post("/gallery/videos", response_model=GalleryVideosResponse, status_code=201)
def create_gallery_videos(
    payload: GalleryVideosCreateRequest,
    service: ContentService = Depends(get_content_service),
):
    videos = service.create_gallery_videos(
        [
            GalleryItemInput(
                url=item.video_url, alt=item.alt, thumbnail_url=item.thumbnail_url
            )
            for item in payload.videos
        ]
    )
    logger.info("Added %d gallery videos", len(videos))
    return {"videos": [v.as_dict() for v in videos]}


@router.post("/gallery/videos/upload", response_model=GalleryVideoResponse, status_code=201)
async def upload_gallery_video(
    video: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    alt: str = Form(""),
    service: ContentService = Depends(get_content_service),
):
    created = service.upload_gallery_video(
        await _read_upload(video), alt, await _read_upload(thumbnail)
    )
    return created.as_dict()


@router.post("/gallery/videos/delete", response_model=DeletedResponse)
def delete_gallery_videos(
    payload: IdsRequest, service: ContentService = Depends(get_content_service)
):
    return DeletedResponse(deleted=service.delete_gallery_videos(payload.ids))


@router.put("/gallery/videos/{video_id}", response_model=GalleryVideoResponse)
async def update_gallery_video(
    video_id: int,
    alt: str = Form(""),
    video_url: Optional[str] = Form(None),
    thumbnail_url: Optional[str] = Form(None),
    video: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    service: ContentService = Depends(get_content_service),
):
    updated = service.update_gallery_video(
        video_id,
        alt,
        video=await _read_upload(video),
        video_url=video_url,
        thumbnail=await _read_upload(thumbnail),
        thumbnail_url=thumbnail_url,
    )
    return updated.as_dict()


@router.delete("/gallery/videos/{video_id}", response_model=StatusResponse)
def delete_gallery_video(video_id: int, service: ContentService = Depends(get_content_service)):
    service.delete_gallery_video(video_id)
    return OK


# ----------------------------------------------------------------------
# Testimonials
# ----------------------------------------------------------------------

_register_order_routes("/testimonials", ContentKind.TESTIMONIALS)


def _testimonial_input(payload: TestimonialRequest) -> TestimonialInput:
    return TestimonialInput(
        name=payload.name,
        address=payload.address,
        company=payload.company,
        content=payload.content,
        rating=payload.rating,
    )


@router.get("/testimonials", response_model=TestimonialsResponse)
def list_testimonials(service: ContentService = Depends(get_content_service)):
    return {"testimonials": [t.as_dict() for t in service.list_testimonials()]}


@router.get("/testimonials/{testimonial_id}", response_model=TestimonialResponse)
def get_testimonial(
    testimonial_id: int, service: ContentService = Depends(get_content_service)
):
    return service.get_testimonial(testimonial_id).as_dict()


@router.post("/testimonials", response_model=TestimonialResponse, status_code=201)
def create_testimonial(
    payload: TestimonialRequest,
    service: ContentService = Depends(get_content_service),
):
    testimonial = service.create_testimonial(_testimonial_input(payload))
    logger.info("Created testimonial %s", testimonial.id)
    return testimonial.as_dict()


@router.put("/testimonials/{testimonial_id}", response_model=TestimonialResponse)
def update_testimonial(
    testimonial_id: int,
    payload: TestimonialRequest,
    service: ContentService = Depends(get_content_service),
):
    return service.update_testimonial(testimonial_id, _testimonial_input(payload)).as_dict()


@router.delete("/testimonials/{testimonial_id}", response_model=StatusResponse)
def delete_testimonial(
    testimonial_id: int, service: ContentService = Depends(get_content_service)
):
    service.delete_testimonial(testimonial_id)
    return OK
