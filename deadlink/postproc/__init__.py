"""Post-processing of lint results: positions and automatic fixes."""

from .fixer import FixResult, TextFixer
from .locator import SourceLocator

__all__ = ["FixResult", "SourceLocator", "TextFixer"]
