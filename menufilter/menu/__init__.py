"""Filtering menu model"""

from menufilter.menu.item import Candidate, InvalidAlternateItemError, MenuItem, modifier_key
from menufilter.menu.menu import Menu

__all__ = ["Candidate", "InvalidAlternateItemError", "Menu", "MenuItem", "modifier_key"]
