"""Adapters: database, repositories, event publishers and caches."""
