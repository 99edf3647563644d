"""Core business logic for the link service."""

from .codegen import CodeGenerator
from .service import LinkService

__all__ = ["CodeGenerator", "LinkService"]
