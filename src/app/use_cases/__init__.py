"""
Use Cases

Business logic organized by domain folder:
- sessions/: Session lifecycle
"""
