"""Extract API documentation from comment annotations and render client snippets."""

__version__ = "0.1.0"
