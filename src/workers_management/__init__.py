"""Workers Management rewards core.

This package is organized by feature modules (attendance, habits, rewards, ...)
with Protocol repositories, MySQL adapters and small service classes on top.
"""
