"""Middleware package for Resource Hog."""

from .auth import init_auth
from .security_headers import init_security_headers

__all__ = ["init_auth", "init_security_headers"]
