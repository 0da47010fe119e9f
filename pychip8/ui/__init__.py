"""Pygame user interface."""

from .app import AppConfig, Chip8App, SurfacePresenter

__all__ = ["AppConfig", "Chip8App", "SurfacePresenter"]
