"""Adapters: integrations with web frameworks."""
