"""Infrastructure layer: backing table store and the virtual pod.

This layer depends on stdlib, third-party libs (SQLAlchemy, pydantic), the
domain layer, and the plugin manager for change notifications. It never
imports from services, shell, commands, or output.
"""
