"""Gateways wrapping external effects (git, BFG, tool installation)."""
