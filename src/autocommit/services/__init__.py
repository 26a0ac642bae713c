"""Service layer — business logic returning ServiceResult.

Services may import from config and infrastructure layers.
They must never import from commands or output, and never prompt or exit.
"""
