"""Office presence tracker package.

This package is organized by feature modules (attendance, holidays, users,
team, matching) with a thin Flask controller layer on top of service and
repository layers.
"""
