"""Page document -> (markup, stylesheet, script)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape
from markupsafe import Markup

from pageship.compiler.scripts import build_script
from pageship.compiler.seo import build_head, font_stylesheet_url
from pageship.compiler.view import ComponentView
from pageship.core.logging import get_logger
from pageship.core.metrics import COMPILE_DEGRADED
from pageship.core.result import Err, Ok, Result
from pageship.models.document import ComponentInstance, PageDocument, Theme
from pageship.models.entities import CompileDegraded, CompiledArtifact
from pageship.styles.treeshake import build_stylesheet
from pageship.styles.vocabulary import StyleVocabulary, default_vocabulary

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).with_name("templates")
COMPONENT_TEMPLATES = frozenset({"hero", "features", "testimonials", "pricing", "faq", "cta"})


def build_environment(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml", "html.j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


@dataclass(slots=True)
class CompileReport:
    artifact: CompiledArtifact
    degraded: list[CompileDegraded] = field(default_factory=list)


class PageCompiler:
    """Pure and deterministic: the same document always yields identical bytes."""

    def __init__(self, vocabulary: StyleVocabulary | None = None, env: Environment | None = None) -> None:
        self.vocabulary = vocabulary or default_vocabulary()
        self.env = env or build_environment()

    def compile(self, document: PageDocument | None) -> CompileReport:
        theme = document.theme if document is not None else Theme()
        components = sorted(document.components, key=lambda c: c.order_index) if document is not None else []
        sections: list[Markup] = []
        tokens: set[str] = set()
        degraded: list[CompileDegraded] = []

        for instance in components:
            result = self.render_component(instance, theme)
            if result.ok:
                markup, used = result.value
                sections.append(markup)
                tokens.update(used)
                continue
            failure = result.error
            degraded.append(failure)
            COMPILE_DEGRADED.labels(component_type=instance.variation_ref.component_type).inc()
            logger.warning(
                "Rendering placeholder for component",
                extra={"ctx_component_id": failure.component_id, "ctx_reason": failure.reason},
            )
            sections.append(self._placeholder(failure))

        head = build_head(document)
        markup = self.env.get_template("page.html.j2").render(
            theme=theme,
            seo=head,
            font_url=font_stylesheet_url(theme),
            sections=sections,
        )
        artifact = CompiledArtifact(
            markup=markup.strip() + "\n",
            stylesheet=build_stylesheet(theme, tokens, self.vocabulary),
            script=build_script(document, self.env),
        )
        return CompileReport(artifact=artifact, degraded=degraded)

    def render_component(
        self, instance: ComponentInstance, theme: Theme
    ) -> Result[tuple[Markup, set[str]], CompileDegraded]:
        ref = instance.variation_ref
        definition = self.vocabulary.resolve(ref)
        if definition is None:
            return Err(CompileDegraded(instance.id, str(ref), "unknown variation"))
        problems = definition.problems()
        if problems:
            return Err(CompileDegraded(instance.id, str(ref), "; ".join(problems)))

        view = ComponentView(instance, definition, theme)
        template_name = (
            f"components/{ref.component_type}.html.j2"
            if ref.component_type in COMPONENT_TEMPLATES
            else "generic.html.j2"
        )
        try:
            rendered = self.env.get_template(template_name).render(c=view)
        except (TemplateError, TypeError, ValueError, AttributeError) as exc:
            return Err(CompileDegraded(instance.id, str(ref), f"render failed: {exc}"))
        return Ok((Markup(rendered.strip()), view.used_tokens))

    def _placeholder(self, failure: CompileDegraded) -> Markup:
        rendered = self.env.get_template("placeholder.html.j2").render(
            component_id=failure.component_id,
            variation_ref=failure.variation_ref,
        )
        return Markup(rendered.strip())


def compile_document(document: PageDocument | None, vocabulary: StyleVocabulary | None = None) -> CompileReport:
    return PageCompiler(vocabulary).compile(document)


def compile_page(document: PageDocument | None, vocabulary: StyleVocabulary | None = None) -> CompiledArtifact:
    """Artifact only; degraded components are still reported through logs and metrics."""
    return compile_document(document, vocabulary).artifact


__all__ = [
    "TEMPLATES_DIR",
    "build_environment",
    "CompileReport",
    "PageCompiler",
    "compile_document",
    "compile_page",
]
