"""Employee Management System package.

This package is organized by feature modules (auth, users, attendance, leaves, ...)
with a thin Flask controller layer over service/repository layers.
"""
