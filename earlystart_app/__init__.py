"""
Early Start App - BuildBoard landing page interactive core

Client-side logic behind the BuildBoard landing page: the music player that
gates the page, the inline early-access signup flow (email then one-time
code), the live signup counter and the footer deployment status.
"""

__version__ = "0.1.0"
__author__ = "BuildBoard Team"
