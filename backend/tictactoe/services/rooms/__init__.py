"""Room domain services: store, session engine and fan-out.

This package holds the room state machine and should be imported by
socket handlers and HTTP routes, keeping transport concerns separated
from game mechanics. Nothing here touches the Flask request context.
"""
