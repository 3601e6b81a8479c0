"""Flask blueprint package for the invoice dashboard routes.

Blueprints are defined in the sibling modules (``auth_routes``,
``main_routes`` and ``invoice_routes``) and registered in
:mod:`dashboard.__init__`.
"""
