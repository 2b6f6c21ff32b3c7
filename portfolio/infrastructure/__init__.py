"""Infrastructure: persistence, cache, and security adapters."""
