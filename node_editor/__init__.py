"""
JSON node editor: normalize node rows, format node paths, patch documents
"""
__version__ = "1.0.0"
