"""
Wardrobe Backend — API Routes Package
======================================

Route Inventory:
    - garments.py:  /garments, /garments/{id}, /garments/{id}/meta,
                    /garments/labels/{label_id}, /garments/{id}/labels/{label_id}
    - comments.py:  /comments, /comments/{id}, /comments/garment/{garment_id}
    - labels.py:    /labels, /labels/{id}, /labels/garment/{garment_id}  (token required)
    - users.py:     /users, /users/login, /users/{username}
    - health.py:    /health

Routes stay thin: they extract request data, call a service and set the
status code and headers. Business rules live in services.
"""
