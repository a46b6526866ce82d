# Services package init
"""
Employee API: Services Layer
==============================

    - validation.py:        field rules shared by both route families
    - employee_service.py:  CRUD against the database session
"""
