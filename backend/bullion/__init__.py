"""Bullion desk: simulated gold/silver rates and booking valuation."""
