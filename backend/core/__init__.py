"""Core backend infrastructure for the club catalog service.

This package contains configuration, logging, database, error, security and
dependency helpers used by the FastAPI application entrypoint.
"""
