# Services package init
"""
EMS Backend — Services Layer
=============================

What:  Business logic layer sitting between routes (HTTP) and the store.
Why:   Separation of concerns: routes handle HTTP, services handle business rules.
How:   Services receive the request's AsyncSession, run one statement, and
       return a response schema or raise an application exception.

Service Inventory:
    - EmployeeService: create, get, update, delete, assign role, update status,
                       search by name, details joined with roles
    - RoleService:     create, delete, count roles
    - AdminService:    total employees / total roles counters

Why services are separate from routes:
    1. Testability: Services can be unit-tested against a real in-memory store
       without HTTP overhead
    2. Single responsibility: Routes map status codes; services decide outcomes
"""
