"""
Use Cases

Organized by domain folder:
- auth/: Session lifecycle (signup, login, refresh, logout, password reset,
  email verification)
"""
