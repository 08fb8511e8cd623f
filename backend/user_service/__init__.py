"""
User Service - user accounts and their cars, stored in MongoDB.
"""
