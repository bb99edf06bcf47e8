"""Social application layer.

Contains application services that orchestrate domain operations and
provide the public API for the social bounded context.
"""
