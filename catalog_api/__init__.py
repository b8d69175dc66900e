"""Product Catalog API.

REST backend for a product catalog with JWT-authenticated ADMIN/USER
roles and a paged search endpoint.
"""
