"""Components shared by the social context and the infrastructure layer.

Holds the record store port (protocol, predicates, store errors), bearer
token validation and the observation context carried by every probe.
Nothing here may import from ``social`` or ``infrastructure``.
"""
