"""
Seisen: a random note from the sensei, when you need it.

A small notes-and-quotes viewer that provides:
- Plain-text note categories (one note per line)
- Random note selection
- Periodic notifications with the current note
"""

__version__ = "0.1.0"
