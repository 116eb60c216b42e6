# FILE: snapcode/models/__init__.py
"""
Pydantic models for request/response validation
"""
from snapcode.models.generation import *
