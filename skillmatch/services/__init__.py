# skillmatch/services/__init__.py
