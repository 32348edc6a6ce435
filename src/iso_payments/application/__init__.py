"""Application layer - Use cases and port definitions.

This layer contains:
- Use Cases: payment initiation and pacs.002 status report handling
- Ports: Abstract interfaces for persistence, time, locking and event delivery

The application layer depends only on the domain layer.
Infrastructure implementations are injected via ports.
"""
