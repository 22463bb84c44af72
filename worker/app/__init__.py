# worker/app/__init__.py
