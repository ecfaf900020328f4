"""Infrastructure adapters: remote API access, resource state and logging."""
