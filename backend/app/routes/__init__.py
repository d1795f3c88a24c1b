"""
VeggieFresh Admin API — API Routes Package
============================================

Route Inventory:
    - auth.py:        POST /api/admin/auth/login, POST /api/admin/auth/refresh,
                      GET  /api/admin/auth/me
    - categories.py:  CRUD /api/admin/categories
    - products.py:    CRUD /api/admin/products
    - orders.py:      GET  /api/admin/orders, GET /api/admin/orders/stats,
                      GET  /api/admin/orders/{id}, PATCH /api/admin/orders/{id}/status
    - health.py:      GET  /health

Routes stay thin: extract parameters, call a service, wrap the result in
the success envelope. Business rules live in services.
"""
