"""
menuwalk - Navigation menu rendering engine

Renders hierarchical navigation menus as accessible HTML with Alpine.js
state, through pluggable walker strategies.
"""

__version__ = "1.0.0"
__author__ = "Rudolph Pienaar"
__email__ = "rudolph.pienaar@gmail.com"

from .lib import MenuRenderer, VariantRegistry, MenuDocument, LOG, state_connectToLogger

__all__ = ["MenuRenderer", "VariantRegistry", "MenuDocument", "LOG", "state_connectToLogger", "__version__"]
