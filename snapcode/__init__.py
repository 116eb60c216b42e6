# FILE: snapcode/__init__.py
"""
snapcode: turn screenshots, wireframes and sketches into React components
"""
__version__ = "0.3.0"
