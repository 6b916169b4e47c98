#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Auth Module - logowanie i kontrola sesji przed oknami katalogu
"""

from auth.service import AuthService, create_auth_service

__all__ = [
    'AuthService',
    'create_auth_service',
]
