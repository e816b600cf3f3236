# Routes package init
"""
WorshipDeck Backend - API Routes Package
=========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - songs.py:          /songs ...           (duplicate-name guarded create + CRUD)
    - presentations.py:  /presentations ...   (slides), /slide/{randomId}
    - psalms.py:         /psalms ...          (verses, bulk import)
    - health.py:         /ping, /health

Design Principle:
    Routes are THIN. They extract path/query/body values, call a service,
    and return its result. Business rules and SQL live in services.
"""
