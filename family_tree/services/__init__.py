"""
Service layer for member management and family tree queries
"""
