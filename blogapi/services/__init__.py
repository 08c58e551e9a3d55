"""
Blog API Backend: Services Layer
=================================

What:  Business logic sitting between routes (HTTP) and repositories.

Service Inventory:
    - PostService: list / create / update / delete posts with category
      existence and ownership checks, returning response envelopes.
"""
