"""Framework adapters for fieldcache."""
