# backend/app/__init__.py
