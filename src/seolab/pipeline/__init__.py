"""Pipeline modules: orchestration on top of the SEO core.

  sitemaps — content fetcher -> sitemap documents with response headers
  build    — sitemap documents -> files on disk, plus build/env validation
"""
