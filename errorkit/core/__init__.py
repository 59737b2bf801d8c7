"""Core utilities and shared application primitives.

Configuration, request middleware and key-set validation for request
payloads.
"""
