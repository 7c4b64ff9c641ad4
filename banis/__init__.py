# banis/__init__.py
"""Banis CLI - read Sikh Banis from BaniDB with an offline cache."""

__version__ = "1.0.0"
