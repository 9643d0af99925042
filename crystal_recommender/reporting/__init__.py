"""
crystal_recommender.reporting - ASCII terminal formatting for the CLI.

Modules:
  formatters - recommendation, energy-state and catalog tables.
"""
