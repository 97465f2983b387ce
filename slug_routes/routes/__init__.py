"""
Slug Routes — Reference Routes
==============================

Route Inventory:
    - articles.py:  GET /api/articles                    (list)
                    GET /api/articles/{article}          (slug binding)
                    GET /api/articles/id/{article_id}    (forced id binding)
                    GET /api/archive/{archived_article}  (slug binding, redirect fallback)
    - users.py:     GET /api/users/{user}                (primary-key binding)
    - health.py:    GET /health
"""
