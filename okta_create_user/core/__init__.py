"""Core Business Logic Module

This module provides the create-user action logic, independent of the
interface that triggers it (CLI runner or Flask HTTP surface).

Module Structure:
    - okta/                   : Okta auth resolution, HTTP client, user service
    - profile.py              : UserProfile and group ID parsing
    - validators.py           : Required parameter and base URL checks
    - provisioning_service.py : invoke / error / halt handlers

Usage Pattern:
    Import explicitly when needed:
        from okta_create_user.core.provisioning_service import invoke, halt
        from okta_create_user.core.okta import OktaActionError
"""
