# Routes package init
"""
EMS Backend — API Routes Package
=================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - employees.py: POST   /employees
                    GET    /employees/search?name=
                    GET    /employees/{id}
                    PUT    /employees/{id}
                    DELETE /employees/{id}
                    POST   /employees/{id}/assign-role
                    GET    /employees/{id}/details
    - admin.py:     GET    /admin/total-employees
                    GET    /admin/total-roles
                    POST   /admin/create-role
                    DELETE /admin/delete-role/{name}
                    PUT    /admin/update-status/{id}
    - health.py:    GET    /health

Design Principle:
    Routes are THIN: one service call each. Failure status codes come from
    the exception handlers registered in main.py.
"""
