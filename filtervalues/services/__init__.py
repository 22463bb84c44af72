# filtervalues/services/__init__.py
