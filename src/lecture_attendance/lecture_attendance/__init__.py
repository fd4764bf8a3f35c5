"""Lecture Attendance package.

This package is organized by feature modules (directory, assignments, roster,
attendance, reports) with a thin Flask JSON controller layer on top of
service/repository layers.
"""
