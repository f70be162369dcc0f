"""Transports sending ``RequestOptions`` with httpx or requests.

Each transport is importable on its own, so only the HTTP library in use needs to be installed.
"""
