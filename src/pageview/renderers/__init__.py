"""Rendering modes. Importing this package registers every built-in renderer."""

from . import debug as _debug  # noqa: F401 - ensure diagnostic renderers are registered
from . import default as _default  # noqa: F401 - ensure default renderer is registered
from .base import RenderMode, RenderStrategy, registry

__all__ = ["RenderMode", "RenderStrategy", "registry"]
