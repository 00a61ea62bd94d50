"""
Controllers Package

HTTP blueprints.
"""

from .session_controller import session_bp

__all__ = ['session_bp']
