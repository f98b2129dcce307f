"""CLI package for BookNest"""
from .main import cli

__all__ = ['cli']
