"""Post CRUD scoped to the authenticated author."""

import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.common.enums import NotFoundMessage, PostStatus
from app.db.models import Post, User
from app.schemas.post import PostCreate, PostUpdate

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_own_post(self, post_id: int, author: User) -> Post:
        post = await self.session.scalar(select(Post).where(Post.id == post_id, Post.author_id == author.id))
        if not post:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NotFoundMessage.NotFoundPost.value)
        return post

    async def create(self, author: User, payload: PostCreate) -> Post:
        post = Post(caption=payload.caption, status=payload.status.value, author_id=author.id)
        self.session.add(post)
        await self.session.commit()
        await self.session.refresh(post)
        logger.info("User %s created post %s", author.id, post.id)
        return post

    async def find_one(self, post_id: int, viewer: User) -> Post:
        """Return a post; drafts are only visible to their author."""
        post = await self.session.get(Post, post_id)
        if not post or (post.status == PostStatus.Draft.value and post.author_id != viewer.id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NotFoundMessage.NotFoundPost.value)
        return post

    async def find_mine(self, author: User) -> list[Post]:
        result = await self.session.scalars(
            select(Post).where(Post.author_id == author.id).order_by(Post.created_at.desc(), Post.id.desc())
        )
        return list(result)

    async def update(self, post_id: int, author: User, payload: PostUpdate) -> Post:
        """Apply only the fields present in the payload."""
        post = await self._get_own_post(post_id, author)
        changes = payload.model_dump(exclude_none=True)
        if "caption" in changes:
            post.caption = changes["caption"]
        if "status" in changes:
            post.status = PostStatus(changes["status"]).value
        await self.session.commit()
        await self.session.refresh(post)
        return post

    async def remove(self, post_id: int, author: User) -> None:
        post = await self._get_own_post(post_id, author)
        await self.session.delete(post)
        await self.session.commit()
        logger.info("User %s deleted post %s", author.id, post_id)
