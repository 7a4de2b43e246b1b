# marketplace/services/comment_service.py

import logging

from sqlalchemy.orm import Session

from marketplace.exceptions import AccessDeniedError, AdNotFoundError, CommentNotFoundError, UserNotFoundError
from marketplace.mappers import apply_comment_update, comment_from_request, to_comment
from marketplace.models.ads import Ad
from marketplace.models.comments import Comment
from marketplace.models.users import User
from marketplace.repositories.user_store import SqlAlchemyUserStore
from marketplace.schemas.comment_schemas import Comments, CommentView, CreateOrUpdateComment
from marketplace.services.ad_service import can_modify

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self, db: Session):
        self.db = db
        self.user_store = SqlAlchemyUserStore(db)

    def _get_user(self, email: str) -> User:
        user = self.user_store.find_by_email(email)
        if user is None:
            raise UserNotFoundError(email)
        return user

    def _get_owned_comment(self, ad_id: int, comment_id: int, email: str) -> Comment:
        comment = self.db.get(Comment, comment_id)
        if comment is None:
            raise CommentNotFoundError(comment_id)
        if comment.ad_id != ad_id:
            raise ValueError(f"Comment {comment_id} does not belong to ad {ad_id}")

        user = self._get_user(email)
        if not can_modify(comment.author_id, user):
            logger.warning(f"User {email} is not allowed to modify comment {comment_id}")
            raise AccessDeniedError("comment", comment_id)
        return comment

    def get_comments(self, ad_id: int) -> Comments:
        logger.debug(f"Listing comments for ad ID: {ad_id}")
        if self.db.get(Ad, ad_id) is None:
            raise AdNotFoundError(ad_id)
        comments = self.db.query(Comment).filter(Comment.ad_id == ad_id).order_by(Comment.id).all()
        results = [to_comment(comment) for comment in comments]
        return Comments(count=len(results), results=results)

    def add_comment(self, ad_id: int, email: str, request: CreateOrUpdateComment) -> CommentView:
        author = self._get_user(email)
        ad = self.db.get(Ad, ad_id)
        if ad is None:
            logger.warning(f"Attempt to comment on missing ad ID: {ad_id}")
            raise AdNotFoundError(ad_id)

        comment = comment_from_request(request)
        comment.ad = ad
        comment.author = author
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        logger.info(f"Comment ID: {comment.id} added to ad ID: {ad_id} by user {email}")
        return to_comment(comment)

    def update_comment(self, ad_id: int, comment_id: int, email: str,
                       request: CreateOrUpdateComment) -> CommentView:
        comment = self._get_owned_comment(ad_id, comment_id, email)
        apply_comment_update(request, comment)
        self.db.commit()
        self.db.refresh(comment)
        logger.info(f"Comment ID: {comment_id} updated by user {email}")
        return to_comment(comment)

    def delete_comment(self, ad_id: int, comment_id: int, email: str) -> None:
        comment = self._get_owned_comment(ad_id, comment_id, email)
        self.db.delete(comment)
        self.db.commit()
        logger.info(f"Comment ID: {comment_id} deleted by user {email}")
