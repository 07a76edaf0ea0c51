"""
Auth Package

Browser driver and portal login.
"""

from .browser import BrowserDriver, BrowserError, PlaywrightBrowser
from .portal_authenticator import PortalAuthenticator

__all__ = [
    "BrowserDriver",
    "BrowserError",
    "PlaywrightBrowser",
    "PortalAuthenticator",
]
