# Routes package init
"""
Employee API: Routes Package
==============================

Route Inventory:
    - employees.py:     /api/employees[/{id}]      envelope responses
    - employeelist.py:  /api/employeelist[/{id}]   bare responses, PUT with id in body
    - health.py:        GET /api/health
    - frontend.py:      GET /{path}                pre-built frontend (catch-all, last)

Routes stay thin: decode the body, call the validator and the service, hand
the result to a ResponseShaper.
"""
