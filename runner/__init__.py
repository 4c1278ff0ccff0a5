"""Smoke runner that exercises a live token issuer over HTTP."""
