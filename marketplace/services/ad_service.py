# marketplace/services/ad_service.py

import logging

from sqlalchemy.orm import Session

from marketplace.exceptions import AccessDeniedError, AdNotFoundError, UserNotFoundError
from marketplace.mappers import ad_from_request, apply_ad_update, to_ad, to_extended_ad
from marketplace.models.ads import Ad
from marketplace.models.comments import Comment
from marketplace.models.users import User
from marketplace.repositories.user_store import SqlAlchemyUserStore
from marketplace.schemas.ad_schemas import Ads, AdView, CreateOrUpdateAd, ExtendedAd
from marketplace.services.image_service import ImageService

logger = logging.getLogger(__name__)


def can_modify(resource_author_id: int, user: User) -> bool:
    """Authors may modify their own resources; administrators may modify any."""
    return resource_author_id == user.id or user.is_admin


class AdService:
    def __init__(self, db: Session, images: ImageService = None):
        self.db = db
        self.user_store = SqlAlchemyUserStore(db)
        self.images = images or ImageService()

    def _get_user(self, email: str) -> User:
        user = self.user_store.find_by_email(email)
        if user is None:
            raise UserNotFoundError(email)
        return user

    def _get_ad(self, ad_id: int) -> Ad:
        ad = self.db.get(Ad, ad_id)
        if ad is None:
            raise AdNotFoundError(ad_id)
        return ad

    def _get_owned_ad(self, ad_id: int, email: str) -> Ad:
        ad = self._get_ad(ad_id)
        user = self._get_user(email)
        if not can_modify(ad.author_id, user):
            logger.warning(f"User {email} is not allowed to modify ad {ad_id}")
            raise AccessDeniedError("ad", ad_id)
        if ad.author_id != user.id:
            logger.debug(f"Ad {ad_id} modified by administrator {email}")
        return ad

    def get_all_ads(self) -> Ads:
        logger.debug("Listing all ads")
        results = [to_ad(ad) for ad in self.db.query(Ad).order_by(Ad.id).all()]
        return Ads(count=len(results), results=results)

    def get_ad(self, ad_id: int) -> ExtendedAd:
        logger.debug(f"Fetching ad with ID: {ad_id}")
        return to_extended_ad(self._get_ad(ad_id))

    def get_user_ads(self, email: str) -> Ads:
        user = self._get_user(email)
        ads = self.db.query(Ad).filter(Ad.author_id == user.id).order_by(Ad.id).all()
        results = [to_ad(ad) for ad in ads]
        logger.debug(f"Found {len(results)} ads for user {email}")
        return Ads(count=len(results), results=results)

    def create_ad(self, email: str, request: CreateOrUpdateAd) -> AdView:
        author = self._get_user(email)
        ad = ad_from_request(request)
        ad.author = author
        self.db.add(ad)
        self.db.commit()
        self.db.refresh(ad)
        logger.info(f"Ad ID: {ad.id} created by user {email}")
        return to_ad(ad)

    def update_ad(self, ad_id: int, email: str, request: CreateOrUpdateAd) -> AdView:
        ad = self._get_owned_ad(ad_id, email)
        apply_ad_update(request, ad)
        self.db.commit()
        self.db.refresh(ad)
        logger.info(f"Ad ID: {ad_id} updated by user {email}")
        return to_ad(ad)

    def update_ad_image(self, ad_id: int, email: str, content: bytes, content_type: str) -> AdView:
        ad = self._get_owned_ad(ad_id, email)
        old_image = ad.image
        old_path = old_image.file_path if old_image is not None else None

        new_image = self.images.upload_ad_image(content, content_type)
        new_path = new_image.file_path
        ad.image = new_image
        if old_image is not None:
            self.db.delete(old_image)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            self.images.remove_file(new_path)
            raise

        if old_path:
            self.images.remove_file(old_path)
        self.db.refresh(ad)
        logger.info(f"Image for ad ID: {ad_id} set to {new_path}")
        return to_ad(ad)

    def delete_ad(self, ad_id: int, email: str) -> None:
        ad = self._get_owned_ad(ad_id, email)
        self.db.query(Comment).filter(Comment.ad_id == ad_id).delete(synchronize_session=False)
        image = ad.image
        image_path = image.file_path if image is not None else None
        self.db.delete(ad)
        if image is not None:
            self.db.delete(image)
        self.db.commit()
        if image_path:
            self.images.remove_file(image_path)
        logger.info(f"Ad ID: {ad_id} deleted by user {email}")
