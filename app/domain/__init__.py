"""
Domain Package
==============
Scheduling value objects, the Program entity, and the error hierarchy.
"""
