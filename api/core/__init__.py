"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks that every feature uses (DB wiring,
settings, logging, the response envelope and error taxonomy). Keep
entity-specific SQL in the corresponding feature package (e.g. `blogs/`).
"""
