# Services package init
"""
Scorekeeper Backend — Services Layer
======================================

What:  Business logic between routes (HTTP) and the persistence gateway.

Service Inventory:
    - UserService:   signup, listing, cascading deletion, authentication
    - RoomService:   per-owner rooms, lookup, rename, cascading deletion
    - PlayerService: enrollment and relative/absolute points updates

Services raise ScorekeeperError subclasses; routes never catch them.
"""
