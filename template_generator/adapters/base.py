"""Abstract base class for template stores.

Generation only reads templates and bumps their usage counters; any
backend that can do those two things can serve it.
"""

from abc import ABC, abstractmethod

from template_generator.schemas.template import TemplateDocument


class TemplateStore(ABC):
    """Contract that any template backend must satisfy."""

    @abstractmethod
    async def find(self, template_id: str) -> TemplateDocument | None:
        """Return the template, or None if it is missing, inactive or private."""

    @abstractmethod
    async def increment_usage(self, template_id: str) -> None:
        """Bump the download counter and last-used timestamp (best effort)."""
