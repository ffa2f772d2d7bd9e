"""
NotesApp Backend — Services Layer
===================================

Service Inventory:
    - CredentialService: signup and login against the users table
    - NoteService: CRUD over the notes table
    - validation: presence and email-format checks shared by both

Both services receive the application's Database at construction time and
keep no other state.
"""
