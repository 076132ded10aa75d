"""Keycloak client to Apikey service synchronization package.

To use the synchronizer:
    from apikey_sync.core.apikey import ApikeySynchronizer, create_synchronizer

To load settings from the environment:
    from apikey_sync.config import load_settings
"""
