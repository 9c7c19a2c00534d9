"""
Cancionero - Songbook API.

A small FastAPI service that keeps a songbook ("repertorio") as a single
JSON document on local disk and exposes CRUD endpoints for it.
"""
