"""
Configuration package for the student transport fee service.
"""

from app.config.settings import settings, get_settings, Settings

__all__ = ['settings', 'get_settings', 'Settings']
