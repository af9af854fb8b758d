"""Utility helpers for fieldcache."""
