"""Social domain module.

Contains value objects, aggregates and the privacy policy engine for the
social bounded context.
"""
