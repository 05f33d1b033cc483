"""Web layer — FastAPI routes and HTML views over the EditService.

Imports from services and domain only; nothing imports from here except
the ``serve`` command.
"""
