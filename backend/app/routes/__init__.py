# Routes package init
"""
AquaGuard Backend — API Routes Package
========================================

Route Inventory:
    - auth.py:         POST  /api/login
    - locations.py:    GET   /api/locations
                       POST  /api/locations
                       PATCH /api/locations/{id}/simulate
    - assessments.py:  POST  /api/assessments
                       POST  /api/locations/{id}/assessment
    - health.py:       GET   /health

Routes stay thin: extract input, call a service, shape the response.
"""
