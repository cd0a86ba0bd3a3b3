"""
Query intent extraction.

Responsibilities:
- Map emotional / situational phrases ("stressed", "me time") to catalog tags.
- Pick out catalog tags mentioned directly in the query.
- Return the union as a tag set used to boost matching items.
"""
