"""Shared utilities: console, UI, logging, settings, paths, subprocess helpers."""
