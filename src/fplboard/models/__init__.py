"""Canonical models for upstream bootstrap and per-player history payloads."""

from .player import BootstrapData, ElementSummary, GameweekEntry, Player, Team

__all__ = ["BootstrapData", "ElementSummary", "GameweekEntry", "Player", "Team"]
