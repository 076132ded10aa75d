"""Core synchronization logic, independent of the Keycloak runtime that hosts it.

Module Structure:
    - apikey/           : Apikey service client and the synchronizer
"""
