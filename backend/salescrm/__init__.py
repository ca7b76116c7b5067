# backend/salescrm/__init__.py
"""
Sales CRM backend application package.

This package contains:
- main: FastAPI application entrypoint
- sales: /api/sales query gateway
- filters: compound (AND/OR) filter model, validation, Notion translation, local evaluation
- notion: Notion API client and page flattening
"""
