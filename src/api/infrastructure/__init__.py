"""Shared infrastructure: settings, logging, database handle and observability."""
