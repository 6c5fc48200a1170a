"""Typed API errors.

Every error the service reports on purpose is a ``MenuError`` subclass. The
class decides the HTTP status and the machine readable ``code`` that ends up
in the uniform error body, so callers never have to match on messages.
"""

from typing import Any, Dict, List, Optional


class MenuError(Exception):
    """Base class for errors rendered by the centralized error handler"""
    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    message: str = "Internal Server Error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[List[Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message or self.message
        self.details = details
        self.headers = headers
        super().__init__(self.message)


class ValidationError(MenuError):
    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Validation error"


class InvalidImageError(ValidationError):
    code = "INVALID_IMAGE"
    message = "Invalid image"


class CategoryHasItemsError(MenuError):
    """Category still owns menu items that are not deleted"""
    status_code = 400
    code = "CATEGORY_HAS_ITEMS"
    message = "Cannot delete category with active menu items"


class AuthenticationError(MenuError):
    status_code = 401
    code = "AUTH_ERROR"
    message = "No token provided"


class InvalidTokenError(MenuError):
    status_code = 401
    code = "INVALID_TOKEN"
    message = "Invalid token"


class InvalidRefreshTokenError(MenuError):
    status_code = 401
    code = "INVALID_REFRESH_TOKEN"
    message = "Invalid refresh token"


class ForbiddenError(MenuError):
    status_code = 403
    code = "FORBIDDEN"
    message = "Insufficient permissions"


class NotFoundError(MenuError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Resource not found"


class CategoryNotFound(NotFoundError):
    code = "CATEGORY_NOT_FOUND"
    message = "Category not found"


class MenuItemNotFound(NotFoundError):
    code = "MENU_ITEM_NOT_FOUND"
    message = "Menu item not found"


class CustomizationNotFound(NotFoundError):
    code = "CUSTOMIZATION_NOT_FOUND"
    message = "Customization option not found"


class ImageProcessingError(MenuError):
    code = "IMAGE_PROCESSING_ERROR"
    message = "Failed to process image"
