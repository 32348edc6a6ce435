"""Cross-cutting concerns shared by every layer except the domain."""
