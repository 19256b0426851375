"""Domain layer: path rules, lookup rules, vocabularies, and record models.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, shell, or config.
"""
