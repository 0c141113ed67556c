"""
Domain layer package.

Contains pure business logic: entities, value objects, domain services,
and port interfaces. No framework imports and no direct IO.
"""
