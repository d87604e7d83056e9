"""Pygame host: window, input mapping and drawing."""
