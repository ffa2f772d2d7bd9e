"""
NotesApp Backend — API Routes Package
=======================================

Route Inventory:
    - health.py:  GET  /                       (greeting)
                  GET  /health                 (service health check)
    - setup.py:   GET  /api/setup-users-table  (create users table)
                  GET  /api/setup-database     (create notes table)
    - auth.py:    POST /api/signup, /api/register
                  POST /api/login
    - notes.py:   GET/POST       /api/notes
                  GET/PUT/DELETE /api/notes/{id}

Routes stay thin: extract request data, call a service, return its result.
"""
