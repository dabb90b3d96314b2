"""World domain services: state store, spawning, collisions and sessions.

This package holds the authoritative game logic. Socket handlers and HTTP
routes import from here, keeping transport concerns separated from the
rules that mutate the shared world.
"""
