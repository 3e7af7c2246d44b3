"""Routers of the web application."""
