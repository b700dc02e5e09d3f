"""Semantic color set handed to every renderer."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    name: str
    bg: str
    fg: str
    dim: str
    accent: str
    secondary: str
    success: str
    warning: str
