"""
Service layer abstraction.

Services encapsulate the validation and persistence logic of a domain
so that API handlers only translate HTTP requests into service calls.
"""
