"""
Configuration package for the complaint management API.
"""

from app.config.settings import Settings, get_settings

__all__ = ['Settings', 'get_settings']
