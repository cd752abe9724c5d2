"""Built-in component variations."""

from __future__ import annotations

from pageship.styles.vocabulary import (
    ComponentVariationMetadata,
    ElementClasses,
    VariationDefinition,
    VisibilityKey,
)

E = ElementClasses.of

_PRIMARY_BUTTON = "bg-blue-600 text-white rounded-lg font-semibold hover:bg-blue-700 transition-all hover:scale-105 shadow-lg text-center"
_SECONDARY_BUTTON = "border-2 border-gray-400 text-gray-300 rounded-lg font-semibold hover:bg-gray-700 transition-colors text-center"


def _keys(*pairs: tuple[str, str]) -> tuple[VisibilityKey, ...]:
    return tuple(VisibilityKey(key, label) for key, label in pairs)


HERO_1 = VariationDefinition(
    metadata=ComponentVariationMetadata(
        component_type="hero",
        variation_number=1,
        variation_name="Split hero with product image",
        visibility_keys=_keys(
            ("badge", "Badge"),
            ("headline", "Headline"),
            ("subheadline", "Subheadline"),
            ("priceContainer", "Price"),
            ("ctaButton", "Primary button"),
            ("secondaryButton", "Secondary button"),
            ("productImage", "Product image"),
        ),
        default_content={
            "badge": "New release",
            "headline": "Build Amazing Landing Pages",
            "subheadline": "Create professional landing pages in minutes",
            "ctaButton": "Get Started Now",
            "secondaryButton": "Learn More",
            "price": "$49",
            "originalPrice": "$99",
            "discountBadge": "50% OFF",
        },
        required_images=1,
    ),
    class_map={
        "container": E(
            "relative overflow-hidden min-h-screen flex items-center py-8 px-3",
            "relative overflow-hidden min-h-screen flex items-center py-16 px-6",
            "relative overflow-hidden min-h-screen flex items-center py-24 px-8",
        ),
        "grid": E(
            "grid items-center grid-cols-1 gap-6 max-w-7xl mx-auto w-full",
            "grid items-center grid-cols-1 gap-10 max-w-7xl mx-auto w-full",
            "grid items-center grid-cols-2 gap-12 max-w-7xl mx-auto w-full",
        ),
        "leftContent": E("text-left order-2 px-2", "text-left order-2 px-0", "text-left order-1 px-0"),
        "rightContent": E("relative order-1 px-2", "relative order-1 px-0", "relative order-2 px-0"),
        "badge": E(
            "inline-flex items-center rounded-full font-medium px-2 py-1 text-xs mb-4 bg-white/10",
            "inline-flex items-center rounded-full font-medium px-3 py-1 text-sm mb-6 bg-white/10",
        ),
        "headline": E(
            "font-bold leading-tight text-2xl mb-3",
            "font-bold leading-tight text-4xl mb-4",
            "font-bold leading-tight text-6xl mb-6",
        ),
        "subheadline": E(
            "text-gray-300 leading-relaxed text-sm mb-4",
            "text-gray-300 leading-relaxed text-lg mb-6",
            "text-gray-300 leading-relaxed text-xl mb-8",
        ),
        "priceContainer": E(
            "flex flex-wrap items-center gap-1.5 mb-4",
            "flex flex-wrap items-center gap-2 mb-6",
            "flex flex-wrap items-center gap-4 mb-8",
        ),
        "price": E("font-bold text-green-400 text-lg", "font-bold text-green-400 text-2xl", "font-bold text-green-400 text-3xl"),
        "originalPrice": E("text-gray-400 line-through text-xs", "text-gray-400 line-through text-sm", "text-gray-400 line-through text-lg"),
        "discountBadge": E(
            "bg-red-500 text-white font-medium rounded px-1 py-0.5 text-xs",
            "bg-red-500 text-white font-medium rounded px-1.5 py-0.5 text-xs",
            "bg-red-500 text-white font-medium rounded px-2 py-1 text-sm",
        ),
        "buttonsContainer": E("flex flex-col gap-2.5", "flex flex-row gap-3", "flex flex-row gap-4"),
        "ctaButton": E(
            f"{_PRIMARY_BUTTON} w-full px-4 py-2.5 text-sm",
            f"{_PRIMARY_BUTTON} w-auto px-6 py-3 text-base",
            f"{_PRIMARY_BUTTON} w-auto px-8 py-4 text-base",
        ),
        "secondaryButton": E(
            f"{_SECONDARY_BUTTON} w-full px-4 py-2.5 text-sm",
            f"{_SECONDARY_BUTTON} w-auto px-6 py-3 text-base",
            f"{_SECONDARY_BUTTON} w-auto px-8 py-4 text-base",
        ),
        "productImage": E(
            "w-full h-64 object-cover rounded-2xl shadow-2xl",
            "w-full h-80 object-cover rounded-2xl shadow-2xl",
            "w-full h-96 object-cover rounded-3xl shadow-2xl",
        ),
    },
    default_styles={
        "container": {"backgroundColor": "#111827", "textColor": "#ffffff"},
    },
    media_elements=frozenset({"productImage"}),
)

HERO_2 = VariationDefinition(
    metadata=ComponentVariationMetadata(
        component_type="hero",
        variation_number=2,
        variation_name="Centered hero",
        visibility_keys=_keys(
            ("badge", "Badge"),
            ("headline", "Headline"),
            ("subheadline", "Subheadline"),
            ("ctaButton", "Primary button"),
            ("secondaryButton", "Secondary button"),
            ("trustIndicators", "Trust line"),
        ),
        default_content={
            "badge": "Trusted by 10,000+ teams",
            "headline": "Launch faster with pages that convert",
            "subheadline": "Everything you need to go from idea to live page today.",
            "ctaButton": "Start Free Trial",
            "secondaryButton": "Watch Demo",
            "trustIndicators": "No credit card required",
        },
    ),
    class_map={
        "container": E("relative flex items-center justify-center py-16 px-4", "relative flex items-center justify-center py-24 px-6", "relative flex items-center justify-center py-32 px-8"),
        "content": E("max-w-3xl mx-auto text-center"),
        "badge": E("inline-block rounded-full px-3 py-1 text-xs font-semibold uppercase tracking-wide mb-4 bg-blue-100 text-blue-700"),
        "headline": E("font-extrabold leading-tight text-3xl mb-4", "font-extrabold leading-tight text-5xl mb-6", "font-extrabold leading-tight text-6xl mb-6"),
        "subheadline": E("text-gray-600 text-base mb-6", "text-gray-600 text-lg mb-8", "text-gray-600 text-xl mb-10"),
        "buttonsContainer": E("flex flex-col items-center gap-3", "flex flex-row justify-center gap-4"),
        "ctaButton": E(f"{_PRIMARY_BUTTON} w-full px-5 py-3 text-base", f"{_PRIMARY_BUTTON} w-auto px-8 py-4 text-lg"),
        "secondaryButton": E(
            "border border-gray-300 text-gray-700 rounded-lg font-semibold hover:bg-gray-100 transition-colors w-full px-5 py-3 text-base",
            "border border-gray-300 text-gray-700 rounded-lg font-semibold hover:bg-gray-100 transition-colors w-auto px-8 py-4 text-lg",
        ),
        "trustIndicators": E("mt-6 text-sm text-gray-500"),
    },
)

HERO_3 = VariationDefinition(
    metadata=ComponentVariationMetadata(
        component_type="hero",
        variation_number=3,
        variation_name="Full-bleed image hero",
        visibility_keys=_keys(
            ("headline", "Headline"),
            ("subheadline", "Subheadline"),
            ("ctaButton", "Primary button"),
            ("heroImage", "Background image"),
        ),
        default_content={
            "headline": "Your product, front and center",
            "subheadline": "A bold backdrop for a bold launch.",
            "ctaButton": "Shop Now",
        },
        required_images=1,
        supports_video=True,
    ),
    class_map={
        "container": E("relative overflow-hidden min-h-screen flex items-end px-4 pb-12", "relative overflow-hidden min-h-screen flex items-end px-8 pb-20", "relative overflow-hidden min-h-screen flex items-center px-16 pb-0"),
        "heroImage": E("absolute inset-0 w-full h-full object-cover"),
        "overlay": E("absolute inset-0 bg-black/50"),
        "content": E("relative z-10 max-w-xl text-white", "relative z-10 max-w-2xl text-white"),
        "headline": E("font-bold leading-tight text-3xl mb-3", "font-bold leading-tight text-5xl mb-4", "font-bold leading-tight text-6xl mb-6"),
        "subheadline": E("text-white/80 text-base mb-6", "text-white/80 text-lg mb-8"),
        "ctaButton": E(f"{_PRIMARY_BUTTON} inline-block px-6 py-3 text-base", f"{_PRIMARY_BUTTON} inline-block px-8 py-4 text-lg"),
    },
    default_styles={"container": {"backgroundColor": "#000000"}},
    media_elements=frozenset({"heroImage"}),
)

FEATURES_1 = VariationDefinition(
    metadata=ComponentVariationMetadata(
        component_type="features",
        variation_number=1,
        variation_name="Three-column feature grid",
        visibility_keys=_keys(("headline", "Headline"), ("subheadline", "Subheadline"), ("featureItems", "Feature cards")),
        default_content={
            "headline": "Why choose us",
            "subheadline": "Everything you need, nothing you don't.",
            "features": [
                {"icon": "⚡", "title": "Fast", "description": "Pages load in under a second."},
                {"icon": "🔒", "title": "Secure", "description": "Security headers on every deploy."},
                {"icon": "📱", "title": "Responsive", "description": "Looks great on every screen."},
            ],
        },
    ),
    class_map={
        "container": E("py-12 px-4", "py-16 px-6", "py-24 px-8"),
        "header": E("max-w-3xl mx-auto text-center mb-10", "max-w-3xl mx-auto text-center mb-12", "max-w-3xl mx-auto text-center mb-16"),
        "headline": E("font-bold text-2xl mb-3", "font-bold text-3xl mb-4", "font-bold text-4xl mb-4"),
        "subheadline": E("text-gray-600 text-base", "text-gray-600 text-lg"),
        "featureItems": E("grid grid-cols-1 gap-6 max-w-6xl mx-auto", "grid grid-cols-2 gap-8 max-w-6xl mx-auto", "grid grid-cols-3 gap-8 max-w-6xl mx-auto"),
        "featureItem": E("rounded-xl border border-gray-200 p-6 shadow-sm hover:shadow-md transition-all"),
        "featureIcon": E("text-3xl mb-4"),
        "featureTitle": E("font-semibold text-lg mb-2"),
        "featureDescription": E("text-gray-600 text-sm", "text-gray-600 text-base"),
    },
)

TESTIMONIALS_1 = VariationDefinition(
    metadata=ComponentVariationMetadata(
        component_type="testimonials",
        variation_number=1,
        variation_name="Quote cards",
        visibility_keys=_keys(("headline", "Headline"), ("testimonialItems", "Testimonials")),
        default_content={
            "headline": "Loved by customers",
            "testimonials": [
                {"quote": "We launched in an afternoon.", "author": "Sam Rivera", "role": "Founder"},
                {"quote": "Conversion went up 30% in a week.", "author": "Alex Chen", "role": "Marketing lead"},
            ],
        },
    ),
    class_map={
        "container": E("py-12 px-4 bg-gray-50", "py-16 px-6 bg-gray-50", "py-24 px-8 bg-gray-50"),
        "headline": E("font-bold text-2xl text-center mb-8", "font-bold text-3xl text-center mb-12"),
        "testimonialItems": E("grid grid-cols-1 gap-6 max-w-5xl mx-auto", "grid grid-cols-2 gap-8 max-w-5xl mx-auto"),
        "testimonialItem": E("rounded-xl bg-white p-6 shadow-md"),
        "quote": E("italic text-gray-700 mb-4 leading-relaxed"),
        "author": E("font-semibold text-gray-900"),
        "role": E("text-sm text-gray-500"),
    },
)

PRICING_1 = VariationDefinition(
    metadata=ComponentVariationMetadata(
        component_type="pricing",
        variation_number=1,
        variation_name="Plan cards",
        visibility_keys=_keys(("headline", "Headline"), ("subheadline", "Subheadline"), ("plans", "Plans")),
        default_content={
            "headline": "Simple pricing",
            "subheadline": "Pick the plan that fits.",
            "plans": [
                {"name": "Starter", "price": "$9", "period": "/month", "features": ["1 page", "Custom domain"], "ctaLabel": "Choose Starter"},
                {"name": "Pro", "price": "$29", "period": "/month", "features": ["10 pages", "Analytics", "Priority support"], "ctaLabel": "Choose Pro", "highlighted": True},
            ],
        },
    ),
    class_map={
        "container": E("py-12 px-4", "py-16 px-6", "py-24 px-8"),
        "header": E("text-center mb-10", "text-center mb-12"),
        "headline": E("font-bold text-2xl mb-2", "font-bold text-3xl mb-3", "font-bold text-4xl mb-4"),
        "subheadline": E("text-gray-600"),
        "plans": E("grid grid-cols-1 gap-6 max-w-4xl mx-auto", "grid grid-cols-2 gap-8 max-w-4xl mx-auto"),
        "plan": E("flex flex-col rounded-2xl border border-gray-200 p-6 shadow-sm", "flex flex-col rounded-2xl border border-gray-200 p-8 shadow-sm"),
        "planHighlighted": E("flex flex-col rounded-2xl border-2 border-blue-600 p-6 shadow-xl", "flex flex-col rounded-2xl border-2 border-blue-600 p-8 shadow-xl"),
        "planName": E("font-semibold text-lg mb-2"),
        "planPrice": E("font-bold text-4xl mb-4"),
        "planPeriod": E("text-base font-normal text-gray-500"),
        "planFeatures": E("space-y-2 mb-6 text-gray-700 flex-1"),
        "planButton": E(f"{_PRIMARY_BUTTON} block w-full px-4 py-3"),
    },
)

FAQ_1 = VariationDefinition(
    metadata=ComponentVariationMetadata(
        component_type="faq",
        variation_number=1,
        variation_name="Accordion",
        visibility_keys=_keys(("headline", "Headline"), ("faqItems", "Questions")),
        default_content={
            "headline": "Frequently asked questions",
            "faqItems": [
                {"question": "What is included?", "answer": "All features are included in every plan with no hidden costs."},
                {"question": "Can I cancel anytime?", "answer": "Yes, cancel whenever you like."},
            ],
        },
    ),
    class_map={
        "container": E("py-12 px-4", "py-16 px-6", "py-24 px-8"),
        "headline": E("font-bold text-2xl text-center mb-8", "font-bold text-3xl text-center mb-12"),
        "faqItems": E("max-w-3xl mx-auto space-y-4"),
        "faqItem": E("rounded-lg border border-gray-200"),
        "question": E("flex w-full items-center justify-between px-4 py-4 text-left font-semibold cursor-pointer", "flex w-full items-center justify-between px-6 py-5 text-left font-semibold cursor-pointer"),
        "answer": E("px-4 pb-4 text-gray-600", "px-6 pb-5 text-gray-600"),
    },
)

CTA_1 = VariationDefinition(
    metadata=ComponentVariationMetadata(
        component_type="cta",
        variation_number=1,
        variation_name="Glass card on gradient",
        visibility_keys=_keys(("headline", "Headline"), ("subheadline", "Subheadline"), ("price", "Price"), ("ctaButton", "Button")),
        default_content={
            "headline": "Ready to get started?",
            "subheadline": "Join thousands of happy customers today.",
            "price": "$49",
            "ctaButton": "Buy Now",
        },
    ),
    class_map={
        "container": E(
            "relative overflow-hidden flex items-center justify-center py-16 px-4",
            "relative overflow-hidden flex items-center justify-center py-20 px-6",
            "relative overflow-hidden flex items-center justify-center py-24 px-8",
        ),
        "card": E(
            "relative max-w-md mx-auto bg-white/10 backdrop-blur-xl rounded-2xl shadow-2xl border border-white/20 p-6",
            "relative max-w-lg mx-auto bg-white/10 backdrop-blur-xl rounded-3xl shadow-2xl border border-white/20 p-8",
            "relative max-w-xl mx-auto bg-white/10 backdrop-blur-xl rounded-3xl shadow-2xl border border-white/20 p-10",
        ),
        "headline": E(
            "font-bold leading-tight text-2xl mb-3 text-white text-center",
            "font-bold leading-tight text-3xl mb-4 text-white text-center",
            "font-bold leading-tight text-4xl mb-6 text-white text-center",
        ),
        "subheadline": E(
            "text-white/80 leading-relaxed text-sm mb-6 text-center",
            "text-white/80 leading-relaxed text-base mb-8 text-center",
            "text-white/80 leading-relaxed text-lg mb-8 text-center",
        ),
        "price": E("font-bold text-white text-3xl text-center mb-6", "font-bold text-white text-4xl text-center mb-6"),
        "ctaButton": E(
            "block w-full bg-white text-gray-900 rounded-xl font-semibold hover:bg-gray-100 transition-all hover:scale-105 shadow-lg px-6 py-3 text-base",
            "block w-full bg-white text-gray-900 rounded-xl font-semibold hover:bg-gray-100 transition-all hover:scale-105 shadow-lg px-8 py-4 text-lg",
        ),
    },
    default_styles={
        "container": {"backgroundColor": "linear-gradient(135deg, #4f46e5 0%, #7c3aed 100%)"},
    },
)

CTA_2 = VariationDefinition(
    metadata=ComponentVariationMetadata(
        component_type="cta",
        variation_number=2,
        variation_name="Banner",
        visibility_keys=_keys(("headline", "Headline"), ("subheadline", "Subheadline"), ("ctaButton", "Button")),
        default_content={
            "headline": "Start building today",
            "subheadline": "Free for your first page.",
            "ctaButton": "Create my page",
        },
    ),
    class_map={
        "container": E("py-10 px-4 bg-gradient-to-r from-blue-600 to-indigo-600", "py-14 px-6 bg-gradient-to-r from-blue-600 to-indigo-600"),
        "inner": E(
            "max-w-5xl mx-auto flex flex-col items-center gap-6 text-center",
            "max-w-5xl mx-auto flex flex-row items-center justify-between gap-8 text-left",
        ),
        "headline": E("font-bold text-white text-2xl", "font-bold text-white text-3xl"),
        "subheadline": E("text-blue-100 text-base mt-2"),
        "ctaButton": E("shrink-0 bg-white text-blue-700 rounded-lg font-semibold hover:bg-blue-50 transition-colors px-6 py-3"),
    },
)

CATALOG: tuple[VariationDefinition, ...] = (
    HERO_1,
    HERO_2,
    HERO_3,
    FEATURES_1,
    TESTIMONIALS_1,
    PRICING_1,
    FAQ_1,
    CTA_1,
    CTA_2,
)


__all__ = ["CATALOG"]
