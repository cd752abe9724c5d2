"""Compiler tests: markup, tree-shaken stylesheet and page script."""

from __future__ import annotations

import uuid
from typing import Any

import pytest

from pageship.compiler import PageCompiler, compile_document, compile_page
from pageship.models.document import PageDocument, parse_document, swap_components
from pageship.styles import ComponentVariationMetadata, ElementClasses, StyleVocabulary, VariationDefinition

MINI_HERO = VariationDefinition(
    metadata=ComponentVariationMetadata(
        component_type="hero",
        variation_number=1,
        variation_name="Minimal hero",
        default_content={"headline": "Default headline", "subheadline": "Default subheadline"},
    ),
    class_map={
        "container": ElementClasses.of("py-8 px-4", "py-16 px-6"),
        "headline": ElementClasses.of("text-2xl font-bold", None, "text-5xl font-bold"),
        "subheadline": ElementClasses.of("text-gray-500 italic"),
    },
)

GALLERY = VariationDefinition(
    metadata=ComponentVariationMetadata(component_type="gallery", variation_number=1, variation_name="Gallery"),
    class_map={"container": ElementClasses.of("py-8")},
)

BROKEN = VariationDefinition(
    metadata=ComponentVariationMetadata(component_type="features", variation_number=9, variation_name="Broken"),
    class_map={"headline": ElementClasses.of("text-xl")},
)


def _component(ref: str, **fields: Any) -> dict[str, Any]:
    return {"id": str(uuid.uuid4()), "variationRef": ref, **fields}


def _document(*components: dict[str, Any], **fields: Any) -> PageDocument:
    return parse_document({"id": "page-1", "slug": "launch", "components": list(components), **fields})


def test_end_to_end_hero_scenario() -> None:
    vocabulary = StyleVocabulary([MINI_HERO])
    document = _document(_component("hero:1", content={"headline": "Hello"}, visibility={"subheadline": False}))
    report = compile_document(document, vocabulary)
    artifact = report.artifact

    assert report.degraded == []
    assert "Hello" in artifact.markup
    assert 'data-element="subheadline"' not in artifact.markup
    assert "Default subheadline" not in artifact.markup

    css = artifact.stylesheet
    assert ".py-8{padding-top:2rem;padding-bottom:2rem}" in css
    assert ".text-2xl{font-size:1.5rem;line-height:2rem}" in css
    assert ".md\\:py-16{" in css
    assert ".lg\\:text-5xl{" in css
    assert ".text-gray-500" not in css
    assert ".italic" not in css


def test_compile_is_deterministic(sample_document) -> None:
    first = compile_page(parse_document(sample_document))
    second = compile_page(parse_document(sample_document))
    assert first == second


def test_visibility_defaults_to_visible() -> None:
    artifact = compile_page(_document(_component("hero:1", content={"headline": "Hi"})))
    assert 'data-element="badge"' in artifact.markup
    assert 'data-element="subheadline"' in artifact.markup
    assert "Create professional landing pages in minutes" in artifact.markup


def test_empty_content_falls_back_to_default_content() -> None:
    artifact = compile_page(_document(_component("hero:1", content={"headline": ""})))
    assert "Build Amazing Landing Pages" in artifact.markup


def test_override_background_beats_theme_and_variation() -> None:
    document = _document(
        _component("hero:1", styleOverrides={"container": {"backgroundColor": "#000"}}),
        theme={"backgroundColor": "#fff"},
    )
    assert "background-color:#000;" in compile_page(document).markup


def test_transparent_override_does_not_win() -> None:
    document = _document(_component("hero:1", styleOverrides={"container": {"backgroundColor": "transparent"}}))
    markup = compile_page(document).markup
    assert "background-color:#111827;" in markup
    assert "background-color:transparent" not in markup


def test_theme_background_applies_without_variation_default() -> None:
    vocabulary = StyleVocabulary([MINI_HERO])
    document = _document(_component("hero:1"), theme={"backgroundColor": "#fafafa"})
    assert 'style="background-color:#fafafa"' in compile_document(document, vocabulary).artifact.markup


def test_gradient_is_emitted_as_background() -> None:
    markup = compile_page(_document(_component("cta:1"))).markup
    assert "background:linear-gradient(135deg, #4f46e5 0%, #7c3aed 100%)" in markup


def test_root_level_overrides_are_folded_into_container() -> None:
    document = _document(_component("hero:1", styleOverrides={"backgroundColor": "#123456"}))
    assert "background-color:#123456;" in compile_page(document).markup


def test_reorder_changes_markup_order() -> None:
    hero = _component("hero:1", orderIndex=1)
    faq = _component("faq:1", orderIndex=2)
    cta = _component("cta:1", orderIndex=3)
    document = _document(hero, faq, cta)
    swapped = document.model_copy(update={"components": swap_components(document.components, 1, 2)})

    assert [c.order_index for c in swapped.components] == [1, 2, 3]
    assert [c.id for c in swapped.components] == [hero["id"], cta["id"], faq["id"]]

    markup = compile_page(swapped).markup
    positions = [markup.index(f'id="section-{item["id"]}"') for item in (hero, cta, faq)]
    assert positions == sorted(positions)


def test_unknown_variation_renders_placeholder_and_continues() -> None:
    missing = _component("hero:99")
    document = _document(missing, _component("faq:1", orderIndex=2))
    report = compile_document(document)
    assert [item.component_id for item in report.degraded] == [missing["id"]]
    assert report.degraded[0].variation_ref == "hero:99"
    assert 'class="pgs-placeholder"' in report.artifact.markup
    assert 'data-component-type="faq"' in report.artifact.markup


def test_malformed_definition_degrades() -> None:
    vocabulary = StyleVocabulary([BROKEN])
    report = compile_document(_document(_component("features:9")), vocabulary)
    assert len(report.degraded) == 1
    assert "container" in report.degraded[0].reason


def test_type_without_template_uses_generic_block() -> None:
    vocabulary = StyleVocabulary([GALLERY])
    document = _document(_component("gallery:1", content={"headline": "Our Work", "subheadline": "Recent projects"}))
    markup = compile_document(document, vocabulary).artifact.markup
    assert 'class="pgs-generic"' in markup
    assert "Our Work" in markup
    assert "Recent projects" in markup


@pytest.mark.parametrize("document", [None, PageDocument(id="p", slug="blank")])
def test_empty_document_compiles_to_empty_page(document) -> None:
    artifact = PageCompiler().compile(document).artifact
    assert "pgs-empty" in artifact.markup
    assert "Add a section" in artifact.markup
    assert artifact.markup.startswith("<!DOCTYPE html>")
    assert artifact.stylesheet
    assert "window.trackEvent" in artifact.script


def test_content_is_escaped() -> None:
    markup = compile_page(_document(_component("hero:1", content={"headline": "<script>alert(1)</script>"}))).markup
    assert "<script>alert(1)</script>" not in markup
    assert "&lt;script&gt;" in markup


def test_media_element_requires_url() -> None:
    without = compile_page(_document(_component("hero:1"))).markup
    assert 'data-element="productImage"' not in without
    with_url = compile_page(
        _document(_component("hero:1", mediaUrls={"productImage": "https://cdn.example/product.png"}))
    ).markup
    assert 'src="https://cdn.example/product.png"' in with_url


def test_custom_actions_become_data_attributes() -> None:
    document = _document(
        _component(
            "hero:1",
            customActions={"ctaButton": {"actionType": "marketplace_checkout", "productId": "sku-1"}},
        )
    )
    markup = compile_page(document).markup
    assert 'data-action="checkout"' in markup
    assert "data-action-data=" in markup
    assert "sku-1" in markup


def test_list_components_render_items() -> None:
    document = _document(
        _component(
            "faq:1",
            content={"faqItems": [{"question": "Is it fast?", "answer": "Very."}, {"question": "Free?", "answer": "No."}]},
        )
    )
    markup = compile_page(document).markup
    assert "Is it fast?" in markup
    assert markup.count("data-faq-toggle=") == 2


def test_head_metadata(sample_document) -> None:
    markup = compile_page(parse_document(sample_document)).markup
    assert '<html lang="en" dir="ltr">' in markup
    assert "<title>Spring Sale</title>" in markup
    assert '<meta name="description" content="Everything half price">' in markup
    assert '<meta name="keywords" content="sale, spring">' in markup
    assert '"@type":"WebPage"' in markup
    assert "family=Inter" in markup
    assert '<main id="landing-page">' in markup


def test_tracking_ids_are_validated() -> None:
    document = _document(
        _component("hero:1"),
        trackingConfig={"facebookPixelId": "123", "googleAnalyticsId": "G-ABC123", "clarityId": "short"},
    )
    script = compile_page(document).script
    assert "googletagmanager.com" in script
    assert '"googleAnalyticsId":"G-ABC123"' in script
    assert "fbevents.js" not in script
    assert "clarity.ms" not in script


def test_facebook_pixel_included_when_valid() -> None:
    document = _document(_component("hero:1"), trackingConfig={"facebookPixelId": "123456789012345"})
    assert "fbevents.js" in compile_page(document).script
