"""
Core Application - Infrastructure & Base Classes

Generic building blocks shared by the domain apps. Nothing in here knows
about channels, messages or users.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Services (import from core.services):
    - BaseService: Base class for service layer (logging, transactions)
    - ServiceResult: Standard result wrapper for success/failure handling

Views (import from core.views):
    - health_check: Database connectivity probe
    - service_failure_response: Map a failed ServiceResult to a Response
"""
