"""Context assembly interfaces."""

from .engine import assemble_context, estimate_tokens, render_context
from .models import ContextPackage

__all__ = ["ContextPackage", "assemble_context", "estimate_tokens", "render_context"]
