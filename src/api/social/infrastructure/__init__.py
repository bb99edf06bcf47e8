"""Social infrastructure layer.

Repository implementations over the shared record store.
"""
