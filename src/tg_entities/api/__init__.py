"""
FastAPI application for the entity extraction service.
"""
