"""Poker equity engine: card model, hand rankers and Monte-Carlo equity."""

__version__ = "0.1.0"
