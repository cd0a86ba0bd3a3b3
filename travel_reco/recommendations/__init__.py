"""
Travel recommendation engine.

Responsibilities:
- Load the flight, hotel and package catalogs and the seed user profiles.
- Score every catalog item against a user, their query intent and budget.
- Rank each catalog and return the top picks with short justifications.
- Report served items to the metrics accumulator as impressions.
"""
