"""pageview: terminal layout and link navigation for parsed documents."""

from .document import Document, Node
from .layout import RenderedDocument, Word
from .renderers import RenderMode
from .session import PageSession

__version__ = "0.1.0"

__all__ = ["Document", "Node", "PageSession", "RenderMode", "RenderedDocument", "Word"]
