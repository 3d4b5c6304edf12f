"""Shared libraries for the report renderer: record store, logging, pagination, templates."""
