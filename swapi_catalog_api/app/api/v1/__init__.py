"""
Version 1 of the API.

This subpackage bundles the planet, people and film endpoints of the
catalog.  Breaking changes should be introduced in a new version
subpackage (e.g. ``v2``).
"""
