"""Intern Attendance package.

Organized by feature modules (trainees, teams, attendance, online) with a thin
Flask controller layer over service/repository layers.
"""
