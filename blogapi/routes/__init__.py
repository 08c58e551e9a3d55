"""
Blog API Backend: API Routes Package
=====================================

Route Inventory:
    - posts.py:   GET/POST/PUT/DELETE /posts
                  /api/Post/{GetPosts,AddPost,UpdatePost,DeletePost} (legacy paths)
    - health.py:  GET /health

Routes stay thin: extract parameters, resolve the acting user, call
post_service, return the envelope it builds.
"""
