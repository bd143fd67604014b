"""
Domain package for the Apliiq client.

Contains the payload schemas for the catalog and order endpoints. The domain
layer knows nothing about transport, signing or caching.
"""
