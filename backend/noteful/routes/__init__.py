"""
Noteful Backend: API Routes Package
=====================================

Route Inventory (all resource routes are mounted under settings.api_prefix):
    - folders.py:   /folders, /folders/{id}
    - tags.py:      /tags, /tags/{id}
    - notes.py:     /notes, /notes/{id}
    - resources.py: router factory shared by folders and tags
    - health.py:    GET /health (not prefixed)

Routes are thin: they pull data out of the request, call a service and
shape the response. Validation and error translation live in the services.
"""
