from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from blog_api.database import get_db
from blog_api.schemas import PostCreate, PostResponse, PostUpdate
from blog_api.services import post_service

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])

@router.get("", response_model=list[PostResponse])
async def list_posts(db: AsyncSession = Depends(get_db)):
    return await post_service.list_posts(db)

# Registered before "/{post_id}" so "search" is not parsed as an id.
@router.get("/search", response_model=list[PostResponse])
async def search_posts(
    title: str = Query(..., description="Case-insensitive title fragment; empty matches every post."),
    db: AsyncSession = Depends(get_db),
):
    return await post_service.search_posts_by_title(db, title)

@router.get("/author/{author_id}", response_model=list[PostResponse])
async def get_posts_by_author(author_id: int, db: AsyncSession = Depends(get_db)):
    return await post_service.get_posts_by_author(db, author_id)

@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: AsyncSession = Depends(get_db)):
    return await post_service.get_post(db, post_id)

@router.post("", status_code=201, response_model=PostResponse)
async def create_post(data: PostCreate, db: AsyncSession = Depends(get_db)):
    return await post_service.create_post(db, data)

@router.put("/{post_id}", response_model=PostResponse)
async def update_post(post_id: int, data: PostUpdate, db: AsyncSession = Depends(get_db)):
    return await post_service.update_post(db, post_id, data)

@router.delete("/{post_id}", status_code=204)
async def delete_post(post_id: int, db: AsyncSession = Depends(get_db)):
    await post_service.delete_post(db, post_id)
