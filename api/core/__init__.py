"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks the feature packages use (the Airtable
client, settings, logging setup). Keep table names and card logic in the
corresponding feature package (e.g. `cards/`).
"""
