#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Product Catalog Core Module
===========================
Wspólne komponenty dla wszystkich modułów.
"""

# Supabase client
from core.supabase_client import (
    get_supabase_client,
    reset_client,
    test_connection,
)

# Exceptions
from core.exceptions import (
    CatalogError,
    ValidationError,
    InvalidFieldValueError,
    AuthError,
    InvalidCredentialsError,
    NotAuthenticatedError,
    BackendError,
    RecordNotFoundError,
    error_message,
)

# Events
from core.events import (
    EventType,
    Event,
    EventBus,
    EventHandler,
    create_event,
    setup_event_logging,
)

# Filters / Query Builder
from core.filters import (
    FilterOperator,
    Filter,
    Sort,
    QueryParams,
    QueryBuilder,
)

# Base classes
from core.base_repository import BaseRepository


__all__ = [
    # Supabase Client
    'get_supabase_client',
    'reset_client',
    'test_connection',

    # Exceptions
    'CatalogError',
    'ValidationError',
    'InvalidFieldValueError',
    'AuthError',
    'InvalidCredentialsError',
    'NotAuthenticatedError',
    'BackendError',
    'RecordNotFoundError',
    'error_message',

    # Events
    'EventType',
    'Event',
    'EventBus',
    'EventHandler',
    'create_event',
    'setup_event_logging',

    # Filters
    'FilterOperator',
    'Filter',
    'Sort',
    'QueryParams',
    'QueryBuilder',

    # Base classes
    'BaseRepository',
]
