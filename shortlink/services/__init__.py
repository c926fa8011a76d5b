"""Service layer for the link shortening service.

This package contains the code generators and the services implementing
link creation and resolution on top of a link store.
"""

from shortlink.services.codegen import (
    CodeGenerator,
    RandomCodeGenerator,
    HashCodeGenerator,
    build_code_generator,
)
from shortlink.services.shortener import ShorteningService
from shortlink.services.redirect import RedirectService

__all__ = [
    "CodeGenerator",
    "RandomCodeGenerator",
    "HashCodeGenerator",
    "build_code_generator",
    "ShorteningService",
    "RedirectService",
]
