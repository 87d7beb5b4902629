"""Compilers for assembling corpus-wide data."""

from .self_citation import SelfCitationCompiler, htmlify_reference

__all__ = ["SelfCitationCompiler", "htmlify_reference"]
