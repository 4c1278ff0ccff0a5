"""Test suite for the token issuer."""
