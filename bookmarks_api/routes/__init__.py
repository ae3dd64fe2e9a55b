"""
Bookmarks API - Routes Package
===============================

What:  HTTP route handlers. Each module owns one URL prefix.

Route Inventory:
    - auth.py:       POST   /auth/signup, /auth/signin
    - users.py:      GET    /users/me
                     PATCH  /users
    - bookmarks.py:  GET    /bookmarks, /bookmarks/{id}
                     POST   /bookmarks
                     PATCH  /bookmarks/{id}
                     DELETE /bookmarks/{id}
    - health.py:     GET    /health

Handlers stay thin: extract request data, call a service, choose the status
code. Errors propagate to the global handlers in main.py.
"""
