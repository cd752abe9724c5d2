"""Page compiler: markup, tree-shaken stylesheet and page script."""

from .compiler import CompileReport, PageCompiler, build_environment, compile_document, compile_page

__all__ = ["CompileReport", "PageCompiler", "build_environment", "compile_document", "compile_page"]
