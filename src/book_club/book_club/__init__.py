"""Book Club package.

Organized by feature modules (members, books, meetings, ...) with a thin
Flask controller layer on top of service/repository layers.
"""
