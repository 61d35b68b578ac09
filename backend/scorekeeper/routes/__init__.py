# Routes package init
"""
Scorekeeper Backend — API Routes Package
==========================================

Route Inventory:
    - users.py:    /users, /users/{id}, /users/authenticate
    - rooms.py:    /userRooms/{id}, /rooms, /rooms/{id}
    - players.py:  /rooms/{roomId}/players[/...]/(points|totalPoints)
    - health.py:   /health

Routes are thin: extract path/body, call a service, return its result.
"""
