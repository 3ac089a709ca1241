"""
Versioned storage for edited JSON documents
"""
