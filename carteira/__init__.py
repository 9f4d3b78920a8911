"""Carteira: portfolio rebalancing and monthly capital-gains calculations."""

__version__ = "0.1.0"
