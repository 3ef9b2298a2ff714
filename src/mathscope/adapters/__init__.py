"""Adapters binding the expansion core to concrete math backends."""
