"""
Внешние интерфейсы приложения.
"""

from .cli import ConsoleUI, main

__all__ = ["ConsoleUI", "main"]
