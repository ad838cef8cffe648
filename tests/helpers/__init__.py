"""Test doubles for http_client tests."""
