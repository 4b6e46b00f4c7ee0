"""
Back office package for the agency website.

This package provides a FastAPI application that manages blog posts,
authors, team members, gallery media and testimonials, with a custom
display order kept in Redis on top of the relational content tables.
"""
