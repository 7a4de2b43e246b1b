"""Custom exceptions for the marketplace core"""

from typing import Optional, Union


class MarketplaceError(Exception):
    """Base exception for the marketplace"""
    pass


class EntityNotFoundError(MarketplaceError):
    """Requested entity does not exist"""
    pass


class UserNotFoundError(EntityNotFoundError):

    def __init__(self, key: Union[int, str]):
        self.key = key
        if isinstance(key, int):
            super().__init__(f"User with ID {key} not found")
        else:
            super().__init__(f"User with email '{key}' not found")


class AdNotFoundError(EntityNotFoundError):

    def __init__(self, ad_id: int):
        self.ad_id = ad_id
        super().__init__(f"Ad with ID {ad_id} not found")


class CommentNotFoundError(EntityNotFoundError):

    def __init__(self, comment_id: int):
        self.comment_id = comment_id
        super().__init__(f"Comment with ID {comment_id} not found")


class AccessDeniedError(MarketplaceError):
    """Caller is neither the owner nor an administrator"""

    def __init__(self, resource_type: str, resource_id: Optional[int] = None):
        self.resource_type = resource_type
        self.resource_id = resource_id
        if resource_id is None:
            super().__init__(f"Access denied to {resource_type}")
        else:
            super().__init__(f"Access denied to {resource_type} with ID {resource_id}")


class InvalidPasswordError(MarketplaceError):
    """Current password did not verify"""

    def __init__(self, message: str = "Invalid password"):
        super().__init__(message)


class DuplicateIdentifierError(MarketplaceError):
    """The store rejected a write because the identifier is already taken"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Identifier '{email}' is already in use")


class ImageNotFoundError(EntityNotFoundError):

    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__(f"Image file '{file_path}' not found")


class InvalidImageError(MarketplaceError):
    """Upload is empty, too large, of an unsupported type or not an image"""
    pass
