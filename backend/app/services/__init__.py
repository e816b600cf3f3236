# Services package init
"""
WorshipDeck Backend - Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Each service method receives the request's AsyncSession explicitly,
       applies its rules, and returns response schemas or raises one of the
       exceptions in app.exceptions.

Service Inventory:
    - SongService:          duplicate-name guarded create + song CRUD
    - PresentationService:  slide CRUD
    - PsalmService:         verse CRUD, bulk import, wipe
    - similarity:           bigram Dice coefficient used by the song guard
    - validation:           required-field checks shared by all services
"""
