# Services package init
"""
AquaGuard Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
Why:   Routes handle HTTP, services handle rules and SQL.

Service Inventory:
    - AssessmentService (abstract): Interface for AI leak assessments
    - GeminiService: Concrete implementation using Google Gemini
    - AuthService: Password-hash login check
    - LocationService: Location CRUD and simulate
    - seed_service: Idempotent startup seed data
"""
