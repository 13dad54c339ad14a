"""Core components of webnest.

This package contains the emitter registry, the install orchestrator and
the registry of installed apps.
"""
