"""Variable store adapters."""
