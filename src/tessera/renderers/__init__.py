"""Tessera renderers.

Available Renderers:
- HtmlRenderer: Serializes the virtual tree to HTML

"""

from tessera.renderers.html import HtmlRenderer, render

__all__ = ["HtmlRenderer", "render"]
