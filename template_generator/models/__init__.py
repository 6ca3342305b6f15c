from template_generator.models.template import Template

__all__ = ["Template"]
