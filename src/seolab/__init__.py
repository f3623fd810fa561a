"""seolab — sitemaps, structured data and meta tags for a headless-CMS content site."""

__version__ = "0.1.0"
