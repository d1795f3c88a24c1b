# Services package init
"""
VeggieFresh Admin API — Services Layer
========================================

What:  Business logic between the routes (HTTP) and the database.
How:   Each service is a stateless singleton; every method receives the
       request's AsyncSession, applies the business rules and returns
       response schemas or raises an application exception.

Service Inventory:
    - AuthService:      admin login, token refresh, user lookup
    - CategoryService:  category CRUD, unique names, delete guard
    - ProductService:   filtered/paginated listing and product CRUD
    - OrderService:     order listing, status changes, dashboard stats
"""
