"""Absensi package.

Organized by feature modules (users, attendance, permissions, holidays,
reports) with a thin Flask controller layer over service/repository layers.
"""
