"""
CLI module for entity extraction.

Provides command-line tools for analysing message texts.
"""

from tg_entities.cli.analyze import main as analyze_main

__all__ = ["analyze_main"]
