# worker/__init__.py
