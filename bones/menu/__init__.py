"""Utilities for menu features such as add-on and selection options."""

from .modifiers import additional_price, option_names

__all__ = ["additional_price", "option_names"]
