"""Utility helpers."""

from mcts_ai.utils.logging import setup_logging

__all__ = ['setup_logging']
