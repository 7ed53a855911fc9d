"""
Integration tests.

Exercise the assembled application: factory, middleware stack, admin
surface and the response cache working together.
"""
