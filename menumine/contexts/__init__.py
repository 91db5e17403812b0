"""Bounded contexts of MENUMINE."""
