"""
Employee API: Application Package
===================================

Layered layout:

    ┌─────────────────────────────────────┐
    │     Routes (employees, employeelist,│  ← HTTP concerns + response shaping
    │     health, frontend)               │
    ├─────────────────────────────────────┤
    │  Services (validation, employees)   │  ← field rules, CRUD orchestration
    ├─────────────────────────────────────┤
    │  Models & Schemas                   │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │  Database (explicit handle)         │  ← async engine + sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
