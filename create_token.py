"""Mint a bearer token for the catalog API.

Usage:
    SECRET_KEY=... python create_token.py someone@example.com [days]
"""
import sys

from swapi_catalog_api.app.core.security import create_access_token

subject = sys.argv[1] if len(sys.argv) > 1 else "admin@example.com"
days = int(sys.argv[2]) if len(sys.argv) > 2 else 365
token = create_access_token({"sub": subject}, expires_delta=days * 24 * 60 * 60)
print(token)
