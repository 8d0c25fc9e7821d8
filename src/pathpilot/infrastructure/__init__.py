"""Infrastructure adapters: provider HTTP client and config-backed assistant registry."""
