"""Adapters implementing the application ports (filesystem, store, decoder)."""
