"""
Auth GUI - okno logowania
"""

from auth.gui.login_window import LoginWindow

__all__ = ['LoginWindow']
