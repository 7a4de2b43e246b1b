# marketplace/mappers.py
"""
Explicit DTO <-> entity conversions.

Every function here is a field-by-field transform. Entity builders never
touch primary keys, authors, timestamps or the password hash; the services
assign those.
"""

from datetime import timezone

from marketplace.models.ads import Ad
from marketplace.models.comments import Comment
from marketplace.models.users import User, UserRole
from marketplace.schemas.ad_schemas import AdView, CreateOrUpdateAd, ExtendedAd
from marketplace.schemas.comment_schemas import CommentView, CreateOrUpdateComment
from marketplace.schemas.user_schemas import Register, UpdateUser, UserView


def _image_url(image):
    return image.image_url if image is not None else None


# --- Users ---

def from_registration_request(request: Register, role: UserRole = None) -> User:
    """Builds a new user record from a registration request, without the password."""
    return User(
        email=request.username,
        first_name=request.first_name,
        last_name=request.last_name,
        phone=request.phone,
        role=role or request.role or UserRole.USER,
        enabled=True,
    )


def to_response(user: User) -> UserView:
    return UserView(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        phone=user.phone,
        role=user.role,
        image=_image_url(user.image),
    )


def apply_user_update(update: UpdateUser, user: User) -> User:
    """Copies the non-null profile fields onto the user. Email and password are never touched."""
    if update.first_name is not None:
        user.first_name = update.first_name
    if update.last_name is not None:
        user.last_name = update.last_name
    if update.phone is not None:
        user.phone = update.phone
    return user


# --- Ads ---

def ad_from_request(request: CreateOrUpdateAd) -> Ad:
    return Ad(title=request.title, price=request.price, description=request.description)


def to_ad(ad: Ad) -> AdView:
    return AdView(
        pk=ad.id,
        author=ad.author_id,
        image=_image_url(ad.image),
        price=ad.price,
        title=ad.title,
    )


def to_extended_ad(ad: Ad) -> ExtendedAd:
    author = ad.author
    return ExtendedAd(
        pk=ad.id,
        author_first_name=author.first_name,
        author_last_name=author.last_name,
        description=ad.description,
        email=author.email,
        image=_image_url(ad.image),
        phone=author.phone,
        price=ad.price,
        title=ad.title,
    )


def apply_ad_update(request: CreateOrUpdateAd, ad: Ad) -> Ad:
    ad.title = request.title
    ad.price = request.price
    ad.description = request.description
    return ad


# --- Comments ---

def comment_from_request(request: CreateOrUpdateComment) -> Comment:
    return Comment(text=request.text)


def to_epoch_millis(value) -> int:
    # SQLite hands back naive datetimes; they are stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def to_comment(comment: Comment) -> CommentView:
    author = comment.author
    return CommentView(
        author=author.id,
        author_image=_image_url(author.image),
        author_first_name=author.first_name,
        created_at=to_epoch_millis(comment.created_at),
        pk=comment.id,
        text=comment.text,
    )


def apply_comment_update(request: CreateOrUpdateComment, comment: Comment) -> Comment:
    comment.text = request.text
    return comment
