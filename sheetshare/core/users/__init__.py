from .service import MIN_USERNAME_LENGTH, UserService

__all__ = ["MIN_USERNAME_LENGTH", "UserService"]
