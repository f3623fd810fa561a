"""In-memory fixture dataset used when no CMS credentials are configured."""

from __future__ import annotations

from seolab.content.models import (
    Asset,
    AssetDetails,
    AssetFile,
    Author,
    BlogPost,
    Category,
    Difficulty,
    FaqEntry,
    Guide,
    GuideStep,
    ImageDetails,
    SeoFields,
)

_EPOCH = "2024-01-01T00:00:00Z"


def _image(asset_id: str, title: str, description: str, url: str, file_name: str,
           size: int, width: int, height: int) -> Asset:
    return Asset(
        id=asset_id,
        created_at=_EPOCH,
        updated_at=_EPOCH,
        title=title,
        description=description,
        file=AssetFile(
            url=url,
            file_name=file_name,
            content_type="image/jpeg",
            details=AssetDetails(size=size, image=ImageDetails(width=width, height=height)),
        ),
    )


ASSETS: list[Asset] = [
    _image(
        "mock-asset-hero",
        "Hero Image - Core Web Vitals",
        "Hero image showcasing Core Web Vitals optimization",
        "https://images.unsplash.com/photo-1551288049-bebda4e38f71?w=1200&h=600&fit=crop",
        "hero-cwv.jpg", 245760, 1200, 600,
    ),
    _image(
        "mock-asset-seo",
        "SEO Optimization Guide",
        "Technical SEO optimization illustration",
        "https://images.unsplash.com/photo-1460925895917-afdab827c52f?w=800&h=400&fit=crop",
        "seo-guide.jpg", 163840, 800, 400,
    ),
    _image(
        "mock-asset-performance",
        "Performance Optimization",
        "Web performance optimization techniques",
        "https://images.unsplash.com/photo-1551288049-bebda4e38f71?w=800&h=400&fit=crop",
        "performance.jpg", 163840, 800, 400,
    ),
    _image(
        "mock-asset-author-avatar",
        "Author Avatar",
        "Professional author avatar",
        "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=150&h=150&fit=crop&crop=face",
        "author-avatar.jpg", 12288, 150, 150,
    ),
]

AUTHORS: list[Author] = [
    Author(
        id="mock-author-1",
        created_at=_EPOCH,
        updated_at=_EPOCH,
        name="Alex Chen",
        slug="alex-chen",
        bio=(
            "Senior Frontend Engineer specializing in performance optimization "
            "and technical SEO."
        ),
        avatar=ASSETS[3],
        social_links={
            "twitter": "https://twitter.com/alexchen",
            "linkedin": "https://linkedin.com/in/alexchen",
            "github": "https://github.com/alexchen",
        },
    ),
    Author(
        id="mock-author-2",
        created_at=_EPOCH,
        updated_at=_EPOCH,
        name="Sarah Johnson",
        slug="sarah-johnson",
        bio="Technical SEO consultant and Core Web Vitals expert.",
        social_links={
            "twitter": "https://twitter.com/sarahjohnson",
            "linkedin": "https://linkedin.com/in/sarahjohnson",
        },
    ),
]

CATEGORIES: list[Category] = [
    Category(
        id="mock-category-performance",
        created_at=_EPOCH,
        updated_at=_EPOCH,
        name="Performance",
        slug="performance",
        description=(
            "Web performance optimization techniques, Core Web Vitals, "
            "and speed improvements."
        ),
        featured_image=ASSETS[2],
        color="#10B981",
    ),
    Category(
        id="mock-category-seo",
        created_at=_EPOCH,
        updated_at=_EPOCH,
        name="Technical SEO",
        slug="technical-seo",
        description=(
            "Advanced technical SEO strategies, structured data, "
            "and search engine optimization."
        ),
        featured_image=ASSETS[1],
        color="#3B82F6",
    ),
    Category(
        id="mock-category-astro",
        created_at=_EPOCH,
        updated_at=_EPOCH,
        name="Astro Framework",
        slug="astro-framework",
        description="Astro framework tutorials, best practices, and advanced techniques.",
        color="#8B5CF6",
    ),
]

BLOG_POSTS: list[BlogPost] = [
    BlogPost(
        id="mock-blog-1",
        created_at=_EPOCH,
        updated_at="2024-01-15T00:00:00Z",
        title="Advanced Core Web Vitals Optimization with Astro",
        slug="advanced-core-web-vitals-optimization-astro",
        excerpt=(
            "Learn advanced techniques for optimizing Core Web Vitals in Astro "
            "applications, including selective hydration, image optimization, "
            "and layout stability."
        ),
        content=(
            "# Advanced Core Web Vitals Optimization with Astro\n\n"
            "Core Web Vitals are essential metrics that measure user experience "
            "on your website.\n\n"
            "## Selective Hydration\n\n"
            "Astro's Islands Architecture allows you to selectively hydrate components."
        ),
        featured_image=ASSETS[0],
        author=AUTHORS[0],
        category=CATEGORIES[0],
        tags=["performance", "core-web-vitals", "astro", "optimization"],
        published_at="2024-01-15T10:00:00Z",
        seo=SeoFields(
            title="Advanced Core Web Vitals Optimization with Astro - Complete Guide",
            description=(
                "Master Core Web Vitals optimization in Astro with selective "
                "hydration, image optimization, and layout stability techniques."
            ),
            og_image=ASSETS[0],
        ),
    ),
    BlogPost(
        id="mock-blog-2",
        created_at=_EPOCH,
        updated_at="2024-01-20T00:00:00Z",
        title="Technical SEO Best Practices for Modern Web Apps",
        slug="technical-seo-best-practices-modern-web-apps",
        excerpt=(
            "Comprehensive guide to implementing technical SEO in modern web "
            "applications, covering structured data, meta tags, and search "
            "engine optimization."
        ),
        content=(
            "# Technical SEO Best Practices for Modern Web Apps\n\n"
            "Every page should include these fundamental meta tags."
        ),
        featured_image=ASSETS[1],
        author=AUTHORS[1],
        category=CATEGORIES[1],
        tags=["seo", "technical-seo", "structured-data", "meta-tags"],
        published_at="2024-01-20T14:30:00Z",
    ),
    BlogPost(
        id="mock-blog-3",
        created_at=_EPOCH,
        updated_at="2024-01-25T00:00:00Z",
        title="Building SEO-First Applications with Astro and Contentful",
        slug="building-seo-first-applications-astro-contentful",
        excerpt=(
            "Discover how to build SEO-first applications using Astro's hybrid "
            "rendering with Contentful as a headless CMS."
        ),
        content=(
            "# Building SEO-First Applications with Astro and Contentful\n\n"
            "1. Always render SEO tags server-side\n"
            "2. Include proper meta tags for social sharing"
        ),
        featured_image=ASSETS[2],
        author=AUTHORS[0],
        category=CATEGORIES[2],
        tags=["astro", "contentful", "seo", "headless-cms", "hybrid-rendering"],
        published_at="2024-01-25T09:15:00Z",
    ),
]

GUIDES: list[Guide] = [
    Guide(
        id="mock-guide-1",
        created_at=_EPOCH,
        updated_at="2024-01-10T00:00:00Z",
        title="Complete Guide to Astro SEO Optimization",
        slug="complete-guide-astro-seo-optimization",
        description=(
            "Step-by-step guide to implementing comprehensive SEO optimization "
            "in Astro applications."
        ),
        content=(
            "This comprehensive guide will walk you through implementing "
            "world-class SEO in your Astro applications."
        ),
        difficulty=Difficulty.INTERMEDIATE,
        estimated_time=120,
        steps=[
            GuideStep(
                title="Install and Configure Astro",
                content=(
                    "Start by creating a new Astro project with TypeScript support "
                    "and configure the basic settings."
                ),
                image=ASSETS[0],
            ),
            GuideStep(
                title="Set Up Contentful Integration",
                content=(
                    "Configure Contentful client with proper environment variables "
                    "and create typed interfaces."
                ),
            ),
            GuideStep(
                title="Implement SEO Components",
                content=(
                    "Create reusable SEO components for meta tags, structured data, "
                    "and canonical URLs."
                ),
            ),
            GuideStep(
                title="Optimize Core Web Vitals",
                content="Apply performance optimizations for LCP, CLS, and FID metrics.",
            ),
        ],
        featured_image=ASSETS[1],
        category=CATEGORIES[1],
        tools=["Astro", "TypeScript", "Contentful", "Vercel", "Lighthouse"],
        published_at="2024-01-10T08:00:00Z",
    ),
    Guide(
        id="mock-guide-2",
        created_at=_EPOCH,
        updated_at="2024-01-12T00:00:00Z",
        title="Core Web Vitals Optimization Masterclass",
        slug="core-web-vitals-optimization-masterclass",
        description=(
            "Master Core Web Vitals optimization with advanced techniques "
            "and real-world examples."
        ),
        content="This masterclass includes practical examples and real-world case studies.",
        difficulty=Difficulty.ADVANCED,
        estimated_time=180,
        steps=[
            GuideStep(
                title="Analyze Current Performance",
                content="Use Lighthouse and field data to establish a performance baseline.",
            ),
            GuideStep(
                title="Optimize Largest Contentful Paint",
                content="Preload hero images and eliminate render-blocking resources.",
            ),
            GuideStep(
                title="Prevent Layout Shifts",
                content="Reserve space for images, embeds, and late-loading content.",
            ),
            GuideStep(
                title="Improve Interactivity",
                content="Split long tasks and defer non-critical JavaScript.",
            ),
        ],
        featured_image=ASSETS[0],
        category=CATEGORIES[0],
        tools=["Lighthouse", "PageSpeed Insights", "Chrome DevTools", "WebPageTest"],
        published_at="2024-01-12T11:30:00Z",
    ),
]

FAQ_ENTRIES: list[FaqEntry] = [
    FaqEntry(
        id="mock-faq-1",
        created_at=_EPOCH,
        updated_at=_EPOCH,
        question="What are Core Web Vitals and why are they important?",
        answer=(
            "Core Web Vitals are user-experience metrics Google uses as ranking "
            "signals: Largest Contentful Paint, Cumulative Layout Shift and "
            "Interaction to Next Paint."
        ),
        category="Performance",
        order=1,
    ),
    FaqEntry(
        id="mock-faq-2",
        created_at=_EPOCH,
        updated_at=_EPOCH,
        question="How does Astro help with SEO optimization?",
        answer=(
            "Astro helps with SEO through its hybrid rendering approach, using "
            "static generation for indexable content and server rendering for "
            "dynamic features."
        ),
        category="SEO",
        order=2,
    ),
    FaqEntry(
        id="mock-faq-3",
        created_at=_EPOCH,
        updated_at=_EPOCH,
        question="What is structured data and how do I implement it?",
        answer=(
            "Structured data is Schema.org markup embedded as JSON-LD that helps "
            "search engines understand your content and enables rich results."
        ),
        category="SEO",
        order=3,
    ),
    FaqEntry(
        id="mock-faq-4",
        created_at=_EPOCH,
        updated_at=_EPOCH,
        question="How do I prevent Cumulative Layout Shift (CLS)?",
        answer=(
            "Always specify dimensions for images and videos, reserve space for "
            "dynamic content and preload fonts to prevent layout shifts."
        ),
        category="Performance",
        order=4,
    ),
    FaqEntry(
        id="mock-faq-5",
        created_at=_EPOCH,
        updated_at=_EPOCH,
        question="What is the difference between SSG and SSR in Astro?",
        answer=(
            "SSG pre-builds pages at build time while SSR generates pages on "
            "request. Use SSG for indexable content and SSR for search and preview."
        ),
        category="Astro",
        order=5,
    ),
]
