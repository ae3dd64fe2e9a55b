"""
Bookmarks API - Services Layer
===============================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - AuthService:     signup (hash + insert) and signin (verify + token)
    - UserService:     current-user profile read and patch
    - BookmarkService: owner-scoped bookmark CRUD
    - FieldMask:       the fields a PATCH body actually supplied

Services are stateless singletons; the request's AsyncSession is passed to
each call, and they flush but never commit.
"""
