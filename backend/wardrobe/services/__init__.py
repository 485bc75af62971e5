# Services package init
"""
Wardrobe Backend — Services Layer
==================================

What:  Business rules between the routes (HTTP) and the database.
How:   Each service takes the request's AsyncSession as its first argument,
       validates input, runs the existence checks and raises the exceptions
       from wardrobe.exceptions. Routes never decide status codes for errors.

Service Inventory:
    - GarmentService: uploads, downloads, updates and label associations
    - CommentService: comments on garments
    - LabelService: classification labels
    - UserService: registration, profile and login
    - auth_service: bcrypt hashing and the JWT TokenService
    - content_classifier: libmagic sniffing against the declared type
    - existence / validation / urls: shared helpers
"""
