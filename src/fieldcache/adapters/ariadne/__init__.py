"""Ariadne framework adapter for fieldcache."""

from fieldcache.adapters.ariadne.directives import make_cache_directive

__all__ = ["make_cache_directive"]
