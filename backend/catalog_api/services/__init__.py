# Services package init
"""
Catalog API — Services Layer
==============================

What:  Business logic between routes (HTTP) and repositories (persistence).
Why:   Routes handle HTTP; services handle validation, pagination and
       translation of store failures into application exceptions.

Service Inventory:
    - validation:     Field presence/type checks and query-parameter parsing
    - ProductService: The five operations of the product resource
    - sample_catalog: Read-only static demo list
"""
