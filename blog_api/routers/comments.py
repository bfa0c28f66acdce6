from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from blog_api.database import get_db
from blog_api.schemas import CommentCreate, CommentResponse, CommentUpdate
from blog_api.services import comment_service

router = APIRouter(prefix="/api/v1/comments", tags=["comments"])

@router.get("", response_model=list[CommentResponse])
async def list_comments(db: AsyncSession = Depends(get_db)):
    return await comment_service.list_comments(db)

@router.get("/post/{post_id}", response_model=list[CommentResponse])
async def get_comments_by_post(post_id: int, db: AsyncSession = Depends(get_db)):
    return await comment_service.get_comments_by_post(db, post_id)

@router.get("/author/{author_id}", response_model=list[CommentResponse])
async def get_comments_by_author(author_id: int, db: AsyncSession = Depends(get_db)):
    return await comment_service.get_comments_by_author(db, author_id)

@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(comment_id: int, db: AsyncSession = Depends(get_db)):
    return await comment_service.get_comment(db, comment_id)

@router.post("", status_code=201, response_model=CommentResponse)
async def create_comment(data: CommentCreate, db: AsyncSession = Depends(get_db)):
    return await comment_service.create_comment(db, data)

@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(comment_id: int, data: CommentUpdate, db: AsyncSession = Depends(get_db)):
    return await comment_service.update_comment(db, comment_id, data.content)

@router.delete("/{comment_id}", status_code=204)
async def delete_comment(comment_id: int, db: AsyncSession = Depends(get_db)):
    await comment_service.delete_comment(db, comment_id)
