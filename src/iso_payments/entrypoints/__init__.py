"""Entrypoints layer - Composition root.

Wires settings, infrastructure adapters and use cases together. Delivery
mechanisms (HTTP, messaging) call the use cases exposed by the Container.
"""

from iso_payments.entrypoints.container import Container, build_container

__all__ = ["Container", "build_container"]
