"""Example agent networks."""
