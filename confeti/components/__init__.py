"""Components layer - domain computation modules.

Components are leaf modules that:
- Do NOT import services or interfaces
- Do NOT access the database; they consume records handed to them
- ARE imported and used BY services
"""
