"""Marshmallow schemas (request validation + response serialization)."""
